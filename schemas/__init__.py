"""
schemas/ - Request Bodies
==========================
Pydantic models for JSON request bodies. Keys may be PascalCase
(`CourseCode`), camelCase (`courseCode`) or snake_case (`course_code`).
Every field is optional here so that missing values reach the
validators and are reported together.
"""
