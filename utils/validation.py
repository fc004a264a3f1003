"""Validation helpers for slash-command arguments.

Slack user names are lowercase letters, digits and a few separators; the
opponent reference in `/ttt start @name` is checked against that shape
before any membership lookup is attempted.
"""
import regex as re


# Allow: any Unicode letter/mark/number plus the separators Slack permits in handles
VALID_USER_NAME_RE = re.compile(r"^[\p{L}\p{M}\p{N}._\-]+$", flags=re.UNICODE)

# Cell index argument for `/ttt play`; sign allowed so negatives are reported as bad moves.
# Longer numbers than any board could need are rejected before int() sees them.
CELL_INDEX_RE = re.compile(r"^[+-]?\d{1,9}$")


def is_valid_user_name(s: str) -> bool:
	"""Return True if `s` looks like a Slack user name (without the leading '@')."""
	if not s:
		return False
	if len(s) > 80:
		return False
	return bool(VALID_USER_NAME_RE.match(s))


def parse_cell_index(s: str) -> int | None:
	"""Return the integer in `s`, or None if it is not a whole number."""
	if not s or not CELL_INDEX_RE.match(s.strip()):
		return None
	return int(s.strip())
