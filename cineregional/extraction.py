"""
Extraction module.
Turns the free-text answer of the search-grounded model into a MovieAnalysis.

Every field is extracted on its own: a missing or malformed block only resets
that field to its entry in FIELD_DEFAULTS, the rest of the analysis survives.
"""

import copy  # hand out fresh copies of default values
import json  # decode embedded JSON blocks
import math  # reject non-finite numbers
import re  # numbered section patterns
from enum import Enum  # block shapes
from typing import Any, Dict, Iterable, List, Optional, Type  # type annotations

from loguru import logger  # console logging

from .models import ContinentalEntry, GlobalStats, MovieAnalysis, RegionalEntry, SourceCitation
from .prompts import CONTINENTAL_BLOCK, DATA_BLOCK, GLOBAL_STATS


class BlockShape(Enum):
	"""Kind of JSON literal expected after a block marker."""
	ARRAY = '['
	OBJECT = '{'

	@property
	def opener(self) -> str:
		return self.value


SUMMARY_PLACEHOLDER = "No summary available."
DEFAULT_SOURCE_TITLE = "Source"

# One default per field, used whenever that field cannot be extracted
FIELD_DEFAULTS: Dict[str, Any] = {
	'summary': SUMMARY_PLACEHOLDER,
	'globalHighlights': [],
	'globalStats': GlobalStats.zeroed(),
	'regionalBreakdown': [],
	'continentalBreakdown': [],
}

# Optional markdown decoration before a section number: "### 2.", "**1. Summary:**"
_SECTION_PREFIX = r"^[ \t]*(?:[#*_>]+[ \t]*)?"
# "1. <summary>" at the start of a line; 1.5 and friends are not section numbers
RE_SUMMARY = re.compile(_SECTION_PREFIX + r"1\.(?!\d)[ \t]*(?P<line>.*)$", re.M)
# Everything after "2." up to the line starting with "3." (or end of text)
RE_HIGHLIGHTS = re.compile(_SECTION_PREFIX + r"2\.(?!\d)(?P<body>.*?)(?=" + _SECTION_PREFIX + r"3\.(?!\d)|\Z)", re.M | re.S)
# Leading bullet marker of a highlight line
RE_BULLET = re.compile(r"^[-*]\s*")
# Bold/underline markers left in a decorated summary line
RE_EMPHASIS = re.compile(r"\*\*|__")


def _finite_float(literal: str) -> float:
	value = float(literal)
	if not math.isfinite(value):  # 1e999 overflows to inf
		raise ValueError(f"non-finite number {literal}")
	return value


def _reject_constant(name: str):
	raise ValueError(f"non-finite number {name}")


# NaN and Infinity are not JSON and cannot be sent back out by the API
_DECODER = json.JSONDecoder(parse_float=_finite_float, parse_constant=_reject_constant)


def default_for(field_name: str) -> Any:
	"""Return a fresh copy of the documented default for a field."""
	return copy.deepcopy(FIELD_DEFAULTS[field_name])


def extract_block(text: str, marker: str, shape: BlockShape) -> Optional[Any]:
	"""
	Best-effort block extractor.

	Finds the first occurrence of `marker`, then decodes the first JSON literal
	of the requested shape that follows it. Code fences around the literal are skipped
	over, never fed to the decoder. Decoding is string-aware, so nested
	arrays and brackets inside string values do not cut the block short.
	Returns None when the marker or literal is missing or does not decode.
	"""
	if not text:
		return None
	at = text.find(marker)
	if at < 0:
		logger.warning(f"[Extractor] Marker {marker} not found in response")
		return None

	# ```json fences sit outside the literal; decoding starts at the opener and stops at its close
	tail = text[at + len(marker):]
	start = tail.find(shape.opener)
	if start < 0:
		logger.warning(f"[Extractor] No {shape.name.lower()} literal after {marker}")
		return None

	try:
		value, end = _DECODER.raw_decode(tail, start)
	except ValueError as e:  # JSONDecodeError or a non-finite number
		logger.warning(f"[Extractor] {marker} is not valid JSON: {e}")
		return None
	logger.debug(f"[Extractor] {marker} decoded ({end - start} chars)")
	return value


def _records_from_array(value: Any, record_cls: Type, marker: str) -> Optional[List[Any]]:
	# Shape check only: a list of objects with the required keys. Values are kept as-is.
	if not isinstance(value, list):
		logger.warning(f"[Extractor] {marker} is not an array")
		return None
	records = []
	for i, item in enumerate(value):
		if not isinstance(item, dict) or any(k not in item for k in record_cls.REQUIRED_KEYS):
			logger.warning(f"[Extractor] {marker} entry {i} does not match {record_cls.__name__}: {item!r}")
			return None
		records.append(record_cls.from_dict(item))
	return records


def extract_regional(text: str) -> List[RegionalEntry]:
	"""Regional breakdown from the DATA_BLOCK array, or [] on any miss."""
	value = extract_block(text, DATA_BLOCK, BlockShape.ARRAY)
	records = _records_from_array(value, RegionalEntry, DATA_BLOCK) if value is not None else None
	return records if records is not None else default_for('regionalBreakdown')


def extract_continental(text: str) -> List[ContinentalEntry]:
	"""Continental breakdown from the CONTINENTAL_BLOCK array, or [] on any miss."""
	value = extract_block(text, CONTINENTAL_BLOCK, BlockShape.ARRAY)
	records = _records_from_array(value, ContinentalEntry, CONTINENTAL_BLOCK) if value is not None else None
	return records if records is not None else default_for('continentalBreakdown')


def extract_global_stats(text: str) -> GlobalStats:
	"""GlobalStats from the GLOBAL_STATS object, or the zeroed stats on any miss."""
	value = extract_block(text, GLOBAL_STATS, BlockShape.OBJECT)
	if value is None:
		return default_for('globalStats')
	if not isinstance(value, dict) or any(k not in value for k in GlobalStats.REQUIRED_KEYS):
		logger.warning(f"[Extractor] {GLOBAL_STATS} does not match GlobalStats: {value!r}")
		return default_for('globalStats')
	return GlobalStats.from_dict(value)


def extract_summary(text: str) -> str:
	"""Text of the first line numbered "1.", or the placeholder."""
	m = RE_SUMMARY.search(text or '')
	summary = RE_EMPHASIS.sub('', m.group('line')).strip() if m else ''
	if not summary:
		logger.warning("[Extractor] No summary line found")
		return default_for('summary')
	return summary


def extract_highlights(text: str) -> List[str]:
	"""Bullet lines between the "2." and "3." sections, markers stripped."""
	m = RE_HIGHLIGHTS.search(text or '')
	if not m:
		logger.warning("[Extractor] No highlights section found")
		return default_for('globalHighlights')
	highlights = []
	for line in m.group('body').split('\n'):
		line = line.strip()
		if line.startswith('-') or line.startswith('*'):
			highlights.append(RE_BULLET.sub('', line).strip())
	return highlights


def _read(obj: Any, name: str) -> Any:
	# Grounding metadata arrives as SDK objects; tests and callers may pass mappings
	if obj is None:
		return None
	if isinstance(obj, dict):
		return obj.get(name)
	return getattr(obj, name, None)


def collect_sources(citations: Optional[Iterable[Any]]) -> List[SourceCitation]:
	"""
	Build the unique source list from grounding chunks or plain citation records.

	Items may be grounding chunks (with a `web` attribute/key holding uri and title)
	or records carrying uri/title directly. Empty uris are dropped and the first
	occurrence of each uri wins.
	"""
	sources: List[SourceCitation] = []
	seen = set()  # uris already kept
	for item in citations or []:
		web = _read(item, 'web')
		record = web if web is not None else item
		uri = _read(record, 'uri') or ''
		if not uri:
			continue
		if uri in seen:
			continue
		seen.add(uri)
		sources.append(SourceCitation(uri=uri, title=_read(record, 'title') or DEFAULT_SOURCE_TITLE))
	logger.debug(f"[Extractor] Collected {len(sources)} unique sources")
	return sources


def parse_analysis(
	title: str,
	text: Optional[str],
	citations: Optional[Iterable[Any]] = None,
	include_global_stats: bool = True,
) -> MovieAnalysis:
	"""Run every field extractor independently and assemble the MovieAnalysis."""
	text = text or ''
	analysis = MovieAnalysis(
		title=title,
		summary=extract_summary(text),
		globalHighlights=extract_highlights(text),
		globalStats=extract_global_stats(text) if include_global_stats else None,
		regionalBreakdown=extract_regional(text),
		continentalBreakdown=extract_continental(text),
		sources=collect_sources(citations),
	)
	logger.info(
		f"[Extractor] Parsed '{title}' | highlights={len(analysis.globalHighlights)} "
		f"regions={len(analysis.regionalBreakdown)} continents={len(analysis.continentalBreakdown)} "
		f"sources={len(analysis.sources)}"
	)
	return analysis
