"""
Shared request-field validators
"""
from typing import Any


def number_as_text(value: Any) -> Any:
    """JSON numbers sent for text fields are stored as their string form"""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value
