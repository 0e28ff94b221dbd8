"""
Display helpers for the dashboard.
Analysis values arrive exactly as the model reported them, so everything here
tolerates strings, objects and out-of-range numbers instead of raising.
"""

import math  # finite checks
from typing import Any, Dict, List, Optional  # type annotations


def as_number(value: Any) -> Optional[float]:
	"""Chart value for a reported amount; None when it is not a finite number."""
	if isinstance(value, bool):  # true/false is not an amount
		return None
	try:
		number = float(value)
	except (TypeError, ValueError):
		return None
	return number if math.isfinite(number) else None  # "1e999", "inf", "nan"


def as_percent(value: Any) -> Optional[int]:
	"""Progress-bar value (0-100) for a reported score; None when it is not a finite number."""
	number = as_number(value)
	if number is None:
		return None
	return max(0, min(100, int(number)))


def display_text(value: Any) -> str:
	"""Plain text for a table cell or label; lists are joined, None is a dash."""
	if value is None:
		return '—'
	if isinstance(value, list):
		return ', '.join(display_text(v) for v in value)
	return str(value)


def platform_list(availability: Any) -> List[str]:
	"""Platform names for display, whatever shape the availability value has."""
	if availability is None:
		return []
	if isinstance(availability, list):
		return [display_text(p) for p in availability]
	return [display_text(availability)]


def regional_chart_rows(entries) -> List[Dict[str, Any]]:
	"""Rows for the regional box office chart; entries without a usable amount are skipped."""
	rows = []
	for r in entries:
		amount = as_number(r.boxOffice)
		if amount is None:
			continue
		rows.append({'region': display_text(r.region), 'boxOffice': amount, 'popularityScore': display_text(r.popularityScore)})
	return rows


def table_rows(entries) -> List[Dict[str, str]]:
	"""All fields of each record (extra keys included) as text, safe for st.dataframe."""
	return [{k: display_text(v) for k, v in e.to_dict().items()} for e in entries]
