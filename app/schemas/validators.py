# app/schemas/validators.py
import re

# Letters, digits and spaces only (category / subcategory names)
NAME_RE = re.compile(r"^[a-zA-Z0-9\s]+$")

# Letters, digits, '-' and '_', with no two separators in a row
URL_RE = re.compile(r"^(?!.*(?:[-_ ]){2,})[a-zA-Z0-9_-]+$")

# Like URL_RE but spaces are allowed too (store names)
STORE_NAME_RE = re.compile(r"^(?!.*(?:[-_ ]){2,})[a-zA-Z0-9_ -]+$")

PHONE_RE = re.compile(r"^\+?\d+$")


def check_pattern(value: str, pattern: re.Pattern, message: str) -> str:
    value = value.strip()
    if not pattern.match(value):
        raise ValueError(message)
    return value
