"""
utils/validation_utils.py

Purpose: Input validation and normalisation

- Hobbies parsing (comma-separated string -> list of tokens)
- ObjectId checks for path parameters
- Form age parsing
"""

from typing import Iterable, List, Optional, Union

from bson import ObjectId


def parse_hobbies(value: Union[str, Iterable[str], None]) -> List[str]:
    """
    Normalises hobbies into an ordered list of non-empty tokens.

    A string is split on commas; every token is trimmed and empty
    tokens are discarded. A list gets the same trimming.

    Examples:
        "reading, coding, " -> ["reading", "coding"]
        ["  x", "", "y"]    -> ["x", "y"]
    """
    if value is None:
        return []

    if isinstance(value, str):
        tokens = value.split(",")
    else:
        tokens = list(value)

    return [token.strip() for token in tokens if token.strip()]


def format_hobbies(hobbies: Optional[Iterable[str]]) -> str:
    """
    Joins hobbies back into the form's comma-separated representation.
    """
    if not hobbies:
        return ""
    return ", ".join(hobbies)


def is_valid_object_id(value: str) -> bool:
    """
    Checks whether a string can name a MongoDB document.

    Args:
        value: Candidate id (24 hex characters)

    Returns:
        True if valid, False otherwise
    """
    return isinstance(value, str) and ObjectId.is_valid(value)


def parse_age(value: str) -> Optional[int]:
    """
    Converts a form age string to an integer.

    Returns:
        The integer age, or None if the text is not a whole number
    """
    if value is None:
        return None

    text = str(value).strip()
    if not text:
        return None

    try:
        return int(text)
    except ValueError:
        pass

    # Numeric inputs may hand over "30.0"
    try:
        number = float(text)
    except ValueError:
        return None
    if not number.is_integer():
        return None
    return int(number)
