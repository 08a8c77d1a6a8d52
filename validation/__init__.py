"""
validation/ - Validation Rules
===============================
Field-level checks for each entity, run by the services before any write.
Every check returns a ValidationResult holding all violations at once;
nothing here touches the database (uniqueness lives in the repositories).
"""
