"""Utility helpers used across the project.

Make commonly used helpers available at the package level for convenience.

Exports:
- time helpers: `now_utc`, `to_iso`, `parse_iso`, `to_utc_string`
- validation helpers: `is_valid_user_name`, `parse_cell_index`, `VALID_USER_NAME_RE`
"""

from .time import now_utc, to_iso, parse_iso, to_utc_string
from .validation import is_valid_user_name, parse_cell_index, VALID_USER_NAME_RE

__all__ = [
	"now_utc",
	"to_iso",
	"parse_iso",
	"to_utc_string",
	"is_valid_user_name",
	"parse_cell_index",
	"VALID_USER_NAME_RE",
]
