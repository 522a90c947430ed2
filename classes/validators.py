import re
from decimal import Decimal, InvalidOperation

from utils.exceptions import InvalidBadgeDefinition

BADGE_CODE_PATTERN = re.compile(r"^[A-Z][A-Z0-9_]*$")


def validate_code(code):
    if not code or not BADGE_CODE_PATTERN.match(code):
        raise InvalidBadgeDefinition(f"Badge code {code!r} must be UPPER_SNAKE_CASE.")
    validate_length("code", code, 50)


def validate_length(field_name, value, max_length):
    if len(value) > max_length:
        raise InvalidBadgeDefinition(f"{field_name} must be {max_length} characters or fewer.")


def validate_required(field_name, value):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidBadgeDefinition(f"{field_name} is required.")


def validate_non_negative(field_name, value):
    if isinstance(value, bool):
        raise InvalidBadgeDefinition(f"{field_name} must be a number, not a boolean.")
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidBadgeDefinition(f"{field_name} must be a number.")
    if number < 0:
        raise InvalidBadgeDefinition(f"{field_name} cannot be negative.")
    return number
