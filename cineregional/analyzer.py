"""
Analysis service module.
Sends one search-grounded request to Gemini per movie and parses the answer into a MovieAnalysis.
"""

import time  # measure upstream latency
from typing import Any, List, Optional  # type annotations

from google import genai  # Gemini client
from google.genai import types  # request configuration types
from loguru import logger  # console logging

from .config import DEFAULT_MODEL, load_settings  # environment-backed settings
from .extraction import parse_analysis  # free text -> MovieAnalysis
from .models import AnalysisRequest, MovieAnalysis  # request/result records
from .prompts import build_analysis_prompt  # instruction template

UPSTREAM_FAILURE_MESSAGE = "Failed to analyze movie. Ensure search access is available."


class AnalysisError(Exception):
	"""The upstream generation call failed (network, auth, quota, bad request)."""

	def __init__(self, message: str = UPSTREAM_FAILURE_MESSAGE):
		super().__init__(message)
		self.message = message


def response_text(response: Any) -> str:
	"""Answer text of a generate_content response, "" when there is none."""
	return getattr(response, 'text', None) or ''


def grounding_chunks(response: Any) -> List[Any]:
	"""Grounding chunks of the first candidate, [] when search metadata is missing."""
	candidates = getattr(response, 'candidates', None) or []
	if not candidates:
		return []
	metadata = getattr(candidates[0], 'grounding_metadata', None)
	return list(getattr(metadata, 'grounding_chunks', None) or [])


class MovieAnalyzer:
	"""
	Regional market analysis for a movie title.
	Holds no per-call state, so one instance can serve concurrent calls.
	"""
	def __init__(
		self,
		client: Optional[Any] = None,  # genai.Client or anything with models.generate_content
		model: str = DEFAULT_MODEL,  # Gemini model name
		include_global_stats: bool = True,  # request the GLOBAL_STATS block
	):
		self._client = client  # created lazily from settings when not injected
		self.model = model
		self.include_global_stats = include_global_stats

	@classmethod
	def from_settings(cls) -> "MovieAnalyzer":
		"""Build an analyzer (and its Gemini client) from environment settings."""
		settings = load_settings()
		client = genai.Client(api_key=settings.api_key) if settings.api_key else None
		if client is None:
			logger.warning("[Analyzer] No GEMINI_API_KEY/API_KEY configured; requests will fail")
		return cls(client=client, model=settings.model, include_global_stats=settings.include_global_stats)

	@property
	def client(self) -> Any:
		if self._client is None:
			# genai.Client raises when no key is configured; analyze() reports that as AnalysisError
			self._client = genai.Client()
		return self._client

	def _generation_config(self) -> types.GenerateContentConfig:
		# Search grounding is the only tool; no streaming, no retries
		return types.GenerateContentConfig(tools=[types.Tool(google_search=types.GoogleSearch())])

	def analyze(self, title: str) -> MovieAnalysis:
		"""
		Analyze one movie.
		Raises ValueError for a blank title and AnalysisError when the upstream call fails.
		Malformed answer text never raises; affected fields fall back to their defaults.
		"""
		request = AnalysisRequest.from_query(title)  # trimmed, non-empty title
		prompt = build_analysis_prompt(request.title, include_global_stats=self.include_global_stats)
		logger.info(f"[Analyzer] Analyzing '{request.title}' with {self.model}")

		start = time.time()  # start timer
		try:
			response = self.client.models.generate_content(
				model=self.model,
				contents=prompt,
				config=self._generation_config(),
			)
			text = response_text(response)
			chunks = grounding_chunks(response)
		except Exception as e:
			logger.error(f"[Analyzer] Gemini API error for '{request.title}': {e}")
			raise AnalysisError() from e
		elapsed_ms = (time.time() - start) * 1000  # compute ms
		logger.info(f"[Analyzer] Upstream answered in {elapsed_ms:.0f} ms ({len(text)} chars, {len(chunks)} citations)")

		return parse_analysis(request.title, text, chunks, include_global_stats=self.include_global_stats)
