"""
FastAPI server exposing the movie market analysis API.
Endpoints:
- GET /health: basic health check
- GET /analyze?title=...: runs one search-grounded analysis and returns the MovieAnalysis

Startup builds the analyzer (and its Gemini client) from environment settings.
"""

# Import standard libraries for timing
import time  # measure startup and request latencies
from typing import Any, List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, HTTPException, Query  # FastAPI primitives
from pydantic import BaseModel, ConfigDict  # response schema definitions

# Import our internal modules for the analysis pipeline
from cineregional.analyzer import AnalysisError, MovieAnalyzer  # search-grounded analysis
from cineregional.models import MovieAnalysis  # pipeline result

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="CineRegional API", version="1.0.0")  # web app

# Globals that hold the analyzer instance and measured startup time
ANALYZER: Optional[MovieAnalyzer] = None  # will point to the initialized analyzer
STARTUP_TIME_S: float = 0.0  # measures how long startup took


# Values are passed through exactly as the model reported them: Any keeps them
# uncoerced (true stays true, objects stay objects) and extra keys are kept too
class PassThroughModel(BaseModel):
	model_config = ConfigDict(extra='allow')


class SourceOut(BaseModel):
	uri: str  # page address
	title: str  # page title


class RegionalOut(PassThroughModel):
	region: Any = None  # market name
	boxOffice: Any = None  # USD millions
	popularityScore: Any = None  # 0-100
	availability: Any = None  # platforms


class ContinentalOut(PassThroughModel):
	continent: Any = None  # continent name
	marketShare: Any = None  # percentage
	status: Any = None  # free-form label
	topCountry: Any = None  # strongest market


class GlobalStatsOut(PassThroughModel):
	totalBoxOffice: Any = None  # pre-formatted, e.g. "$750M+"
	criticScore: Any = None  # 0-100
	audienceScore: Any = None  # 0-100
	globalReachIndex: Any = None  # 1-10
	releaseStatus: Any = None  # e.g. "Streaming"


# Pydantic model for the complete analysis response payload
class MovieAnalysisOut(BaseModel):
	title: str  # searched title
	summary: str  # one-line status
	globalHighlights: List[str]  # bullet highlights
	globalStats: Optional[GlobalStatsOut] = None  # absent for the two-block prompt
	regionalBreakdown: List[RegionalOut]  # per-market rows
	continentalBreakdown: List[ContinentalOut]  # per-continent rows
	sources: List[SourceOut]  # unique citations
	elapsed_ms: float = 0.0  # server-side analysis time in ms


def to_response(analysis: MovieAnalysis, elapsed_ms: float = 0.0) -> MovieAnalysisOut:
	"""Convert the pipeline result into the response schema."""
	return MovieAnalysisOut(**analysis.to_dict(), elapsed_ms=round(elapsed_ms, 2))


# FastAPI startup hook to initialize the analyzer once
@app.on_event("startup")
async def startup_event():
	"""Initialize the analyzer and log how long it took."""
	global ANALYZER, STARTUP_TIME_S  # refer to module-level globals
	start = time.time()  # start timer for startup latency
	logger.info("[API] Startup: initializing analyzer...")  # log intent
	ANALYZER = MovieAnalyzer.from_settings()  # create analyzer
	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s using model {ANALYZER.model}.")  # summary log


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"analyzer_ready": ANALYZER is not None,  # True if analyzer initialized
		"model": ANALYZER.model if ANALYZER is not None else None,  # configured model
		"startup_seconds": round(STARTUP_TIME_S, 2),  # startup latency
	}


# Main analysis endpoint; sync so the blocking Gemini call runs in the threadpool
@app.get("/analyze", response_model=MovieAnalysisOut)
def analyze(title: str = Query(..., description="Movie title to analyze")):
	"""Run one analysis and return the structured result."""
	if ANALYZER is None:  # analyzer must be ready to serve
		logger.warning("[API] Analysis requested but analyzer not initialized")  # guard log
		raise HTTPException(status_code=503, detail="Analyzer is not initialized")

	start = time.time()  # start timer
	logger.debug(f"[API] /analyze title='{title}'")  # debug log of input
	try:
		analysis = ANALYZER.analyze(title)  # run pipeline
	except ValueError as e:  # blank title
		raise HTTPException(status_code=422, detail=str(e))
	except AnalysisError as e:  # upstream failure, message shown to the user as-is
		raise HTTPException(status_code=502, detail=e.message)
	elapsed_ms = (time.time() - start) * 1000  # compute ms
	logger.info(f"[API] /analyze served '{analysis.title}' in {elapsed_ms:.2f} ms")  # summary
	return to_response(analysis, elapsed_ms)
