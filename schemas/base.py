"""
schemas/base.py
---------------
Shared base for request bodies.

Keys are matched in PascalCase (`CourseCode`), camelCase (`courseCode`,
the shape every response uses) or snake_case (`course_code`), so a
record returned by a Find endpoint can be sent straight back to Update.
"""

from datetime import date, datetime
from typing import Annotated, Any

from pydantic import (
    AliasChoices,
    AliasGenerator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    TypeAdapter,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel, to_pascal

_DATETIME = TypeAdapter(datetime)


def field_aliases(name: str) -> AliasChoices:
    return AliasChoices(to_pascal(name), to_camel(name), name)


def date_part(value: Any) -> Any:
    """
    Reduce a timestamp to its calendar date.

    Strings that are not timestamps are passed through untouched so the
    date validator reports them.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        try:
            return _DATETIME.validate_python(value).date()
        except PydanticValidationError:
            return value
    return value


# A date that also accepts "2024-01-01T09:30:00" and keeps 2024-01-01
Day = Annotated[date, BeforeValidator(date_part)]


class RequestBody(BaseModel):
    model_config = ConfigDict(
        alias_generator=AliasGenerator(validation_alias=field_aliases),
        populate_by_name=True,
    )
