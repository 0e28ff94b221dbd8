"""
Search controller.
Tracks the dashboard state (idle, searching, result, error) and makes sure a slow
earlier search never overwrites the result of a newer one.
"""

import threading  # guard state across concurrent completions
from dataclasses import dataclass, replace  # immutable-ish state snapshots
from enum import Enum  # UI phases
from typing import Optional  # optional result/error

from loguru import logger  # console logging

from .analyzer import AnalysisError, MovieAnalyzer  # pipeline entry point
from .models import AnalysisRequest, MovieAnalysis  # request/result records

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class SearchPhase(str, Enum):
	IDLE = 'idle'
	SEARCHING = 'searching'
	RESULT = 'result'
	ERROR = 'error'


@dataclass
class SearchState:
	phase: SearchPhase = SearchPhase.IDLE  # current UI phase
	query: Optional[str] = None  # title of the latest submitted search
	result: Optional[MovieAnalysis] = None  # set in RESULT
	error: Optional[str] = None  # user-facing message, set in ERROR
	ticket: int = 0  # sequence number of the latest submitted search


class SearchController:
	"""
	Idle -> Searching -> Result | Error, and back to Searching on the next submission.
	Every submission gets a ticket; only the latest ticket may complete the search.
	"""
	def __init__(self, analyzer: MovieAnalyzer):
		self.analyzer = analyzer
		self._state = SearchState()
		self._lock = threading.Lock()

	@property
	def state(self) -> SearchState:
		with self._lock:
			return replace(self._state)  # snapshot, callers never mutate ours

	@property
	def is_busy(self) -> bool:
		"""True while a search is in flight; the UI disables its trigger."""
		return self.state.phase == SearchPhase.SEARCHING

	def begin(self, query: Optional[str]) -> Optional[int]:
		"""Start a search; blank queries are ignored and return None."""
		try:
			request = AnalysisRequest.from_query(query)
		except ValueError:
			logger.debug("[Controller] Ignoring blank query")
			return None
		with self._lock:
			ticket = self._state.ticket + 1
			# The previous result stays visible until this search completes
			self._state = replace(self._state, phase=SearchPhase.SEARCHING, query=request.title, error=None, ticket=ticket)
		logger.info(f"[Controller] Search #{ticket} started for '{request.title}'")
		return ticket

	def resolve(self, ticket: int, analysis: MovieAnalysis) -> bool:
		"""Store a finished analysis; returns False when a newer search superseded it."""
		with self._lock:
			if ticket != self._state.ticket:
				logger.info(f"[Controller] Discarding stale result #{ticket} (latest #{self._state.ticket})")
				return False
			self._state = replace(self._state, phase=SearchPhase.RESULT, result=analysis, error=None)
		logger.info(f"[Controller] Search #{ticket} finished")
		return True

	def fail(self, ticket: int, message: str) -> bool:
		"""Store a failure message; returns False when a newer search superseded it."""
		with self._lock:
			if ticket != self._state.ticket:
				logger.info(f"[Controller] Discarding stale error #{ticket} (latest #{self._state.ticket})")
				return False
			self._state = replace(self._state, phase=SearchPhase.ERROR, result=None, error=message)
		logger.warning(f"[Controller] Search #{ticket} failed: {message}")
		return True

	def submit(self, query: Optional[str]) -> SearchState:
		"""Run a whole search synchronously and return the resulting state."""
		ticket = self.begin(query)
		if ticket is None:
			return self.state
		title = query.strip()
		try:
			analysis = self.analyzer.analyze(title)
		except AnalysisError as e:
			self.fail(ticket, e.message)
		except Exception as e:
			logger.exception(f"[Controller] Unexpected failure for '{title}'")
			self.fail(ticket, f"{UNEXPECTED_ERROR_MESSAGE}: {e}")
		else:
			self.resolve(ticket, analysis)
		return self.state
