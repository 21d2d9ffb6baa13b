"""
Field validation for users and courses.

Each validator takes the full set of column values a record will have after
a write (snake_case keys, as on the models) and returns a list of FieldError
named after the API's camelCase fields. An empty list means the write may
proceed. The repository calls these before every insert and update.
"""

from typing import Any, Dict, List

from email_validator import EmailNotValidError, validate_email

from coursehub.core.errors import FieldError


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _require(fields: Dict[str, Any], column: str, api_name: str, message: str, errors: List[FieldError]) -> bool:
    if _is_blank(fields.get(column)):
        errors.append(FieldError(api_name, message))
        return False
    return True


def validate_user(fields: Dict[str, Any]) -> List[FieldError]:
    errors: List[FieldError] = []
    _require(fields, "first_name", "firstName", "Please enter a user first name", errors)
    _require(fields, "last_name", "lastName", "Please enter a user last name", errors)
    if _require(fields, "email_address", "emailAddress", "Please enter a valid email", errors):
        try:
            # Syntax only; no DNS lookups on the request path
            validate_email(fields["email_address"], check_deliverability=False)
        except EmailNotValidError:
            errors.append(FieldError("emailAddress", "Please enter a valid email address"))
    _require(fields, "password", "password", "Please enter a password", errors)
    return errors


def validate_course(fields: Dict[str, Any]) -> List[FieldError]:
    errors: List[FieldError] = []
    _require(fields, "owner_id", "ownerId", "Please enter a user ID", errors)
    _require(fields, "title", "title", "Please enter a title", errors)
    _require(fields, "description", "description", "Please enter a description", errors)
    return errors
