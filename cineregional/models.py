"""
Data models for CineRegional.
Defines the records produced by the extraction pipeline and handed to the dashboard.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Import typing helpers for precise and self-documenting types
from typing import Any, Dict, List, Optional  # lists, mappings and optional values


@dataclass
class AnalysisRequest:
	"""A single free-text movie title to analyze."""
	title: str  # trimmed, non-empty movie title

	@classmethod
	def from_query(cls, query: Optional[str]) -> "AnalysisRequest":
		"""Trim the raw user input and reject blank titles."""
		title = (query or '').strip()  # normalize surrounding whitespace
		if not title:  # empty input guard
			raise ValueError("Movie title cannot be empty")
		return cls(title=title)


def _record_from_dict(cls, data: Dict[str, Any]):
	# Known keys become fields, anything else is kept verbatim in `extra`
	extra = {k: v for k, v in data.items() if k not in cls.REQUIRED_KEYS}
	return cls(**{k: data[k] for k in cls.REQUIRED_KEYS}, extra=extra)


def _record_to_dict(record) -> Dict[str, Any]:
	out = dict(record.extra)
	out.update({k: getattr(record, k) for k in record.REQUIRED_KEYS})
	return out


@dataclass
class SourceCitation:
	"""A web page the model consulted while answering."""
	uri: str  # page address (never empty once collected)
	title: str  # page title, "Source" when the metadata has none

	def to_dict(self) -> Dict[str, Any]:
		return {'uri': self.uri, 'title': self.title}


@dataclass
class RegionalEntry:
	"""
	Performance of the movie in one major market.
	Numbers are kept exactly as the model reported them (no clamping or coercion).
	"""
	region: Any  # market name, e.g. "USA"
	boxOffice: Any  # box office in USD millions
	popularityScore: Any  # 0-100 expected
	availability: Any  # ordered platform names, e.g. ["Netflix", "Max"]
	extra: Dict[str, Any] = field(default_factory=dict)  # keys the model added beyond the known ones

	REQUIRED_KEYS = ('region', 'boxOffice', 'popularityScore', 'availability')

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "RegionalEntry":
		return _record_from_dict(cls, data)

	def to_dict(self) -> Dict[str, Any]:
		return _record_to_dict(self)


@dataclass
class ContinentalEntry:
	"""Share of the movie's market on one continent."""
	continent: Any  # e.g. "Asia"
	marketShare: Any  # percentage, 0-100 expected
	status: Any  # free-form label such as "Trending" or "Stable"
	topCountry: Any  # strongest country on the continent
	extra: Dict[str, Any] = field(default_factory=dict)  # keys the model added beyond the known ones

	REQUIRED_KEYS = ('continent', 'marketShare', 'status', 'topCountry')

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "ContinentalEntry":
		return _record_from_dict(cls, data)

	def to_dict(self) -> Dict[str, Any]:
		return _record_to_dict(self)


@dataclass
class GlobalStats:
	"""Headline worldwide numbers shown above the breakdowns."""
	totalBoxOffice: Any  # pre-formatted, e.g. "$750M+"
	criticScore: Any  # 0-100
	audienceScore: Any  # 0-100
	globalReachIndex: Any  # 1-10
	releaseStatus: Any  # e.g. "In theaters"
	extra: Dict[str, Any] = field(default_factory=dict)  # keys the model added beyond the known ones

	REQUIRED_KEYS = ('totalBoxOffice', 'criticScore', 'audienceScore', 'globalReachIndex', 'releaseStatus')

	@classmethod
	def zeroed(cls) -> "GlobalStats":
		"""Default stats used when the GLOBAL_STATS block cannot be extracted."""
		return cls(totalBoxOffice='N/A', criticScore=0, audienceScore=0, globalReachIndex=0, releaseStatus='Unknown')

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "GlobalStats":
		return _record_from_dict(cls, data)

	def to_dict(self) -> Dict[str, Any]:
		return _record_to_dict(self)


@dataclass
class MovieAnalysis:
	"""
	Everything the dashboard shows for one search.
	Built once per search and replaced (never merged) by the next one.
	"""
	title: str  # the title the user searched for
	summary: str  # one-line status summary
	globalHighlights: List[str] = field(default_factory=list)  # bullet highlights in order
	globalStats: Optional[GlobalStats] = None  # absent when the prompt variant skips it
	regionalBreakdown: List[RegionalEntry] = field(default_factory=list)  # per-market rows
	continentalBreakdown: List[ContinentalEntry] = field(default_factory=list)  # per-continent rows
	sources: List[SourceCitation] = field(default_factory=list)  # unique by uri, first seen kept

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "MovieAnalysis":
		"""Rebuild an analysis from its to_dict() shape (e.g. an /analyze response)."""
		stats = data.get('globalStats')
		return cls(
			title=data.get('title', ''),
			summary=data.get('summary', ''),
			globalHighlights=list(data.get('globalHighlights') or []),
			globalStats=GlobalStats.from_dict(stats) if stats else None,
			regionalBreakdown=[RegionalEntry.from_dict(r) for r in data.get('regionalBreakdown') or []],
			continentalBreakdown=[ContinentalEntry.from_dict(c) for c in data.get('continentalBreakdown') or []],
			sources=[SourceCitation(uri=s['uri'], title=s['title']) for s in data.get('sources') or []],
		)

	def to_dict(self) -> Dict[str, Any]:
		"""Serialize to the camelCase shape used by the API and the UI."""
		return {
			'title': self.title,
			'summary': self.summary,
			'globalHighlights': list(self.globalHighlights),
			'globalStats': self.globalStats.to_dict() if self.globalStats else None,
			'regionalBreakdown': [r.to_dict() for r in self.regionalBreakdown],
			'continentalBreakdown': [c.to_dict() for c in self.continentalBreakdown],
			'sources': [s.to_dict() for s in self.sources],
		}
