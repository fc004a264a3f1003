"""Time utilities: timezone-aware helpers and ISO formatting/parsing.

These helpers keep code that deals with timestamps consistent across modules.
"""
from datetime import datetime, timezone
from typing import Optional


def now_utc() -> datetime:
	"""Return current UTC datetime with tzinfo set."""
	return datetime.now(timezone.utc)


def to_iso(dt: datetime) -> str:
	"""Serialize a datetime to ISO8601 string."""
	return dt.isoformat()


def parse_iso(s: str) -> Optional[datetime]:
	"""Parse an ISO8601 string into a timezone-aware datetime when possible.

	Naive values are assumed to be UTC. Returns None on obvious parse failures.
	"""
	if not s:
		return None
	try:
		# Python's fromisoformat handles most variants; tolerate trailing Z.
		if s.endswith("Z"):
			s = s[:-1] + "+00:00"
		dt = datetime.fromisoformat(s)
	except ValueError:
		return None
	if dt.tzinfo is None:
		dt = dt.replace(tzinfo=timezone.utc)
	return dt


def to_utc_string(dt: datetime) -> str:
	"""Format a datetime the way HTTP dates look, e.g. 'Tue, 04 Oct 2016 18:02:11 GMT'."""
	return dt.astimezone(timezone.utc).strftime("%a, %d %b %Y %H:%M:%S GMT")
