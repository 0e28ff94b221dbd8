"""
Configuration for CineRegional.
Settings come from environment variables, optionally loaded from a local .env file.
"""

import os  # environment access
from dataclasses import dataclass  # simple settings container
from typing import Optional  # API key may be absent

from dotenv import load_dotenv  # read .env into the environment

# Defaults used when the environment does not override them
DEFAULT_MODEL = "gemini-3-flash-preview"  # search-grounded text model
DEFAULT_API_URL = "http://localhost:8000"  # where the FastAPI server runs locally


@dataclass
class Settings:
	api_key: Optional[str]  # Gemini API key (GEMINI_API_KEY or API_KEY)
	model: str = DEFAULT_MODEL  # model used for generate_content
	include_global_stats: bool = True  # ask the model for the GLOBAL_STATS block
	api_url: str = DEFAULT_API_URL  # base URL the Streamlit UI calls in API mode


def _env_flag(name: str, default: bool) -> bool:
	raw = os.getenv(name)
	if raw is None or not raw.strip():
		return default
	return raw.strip().lower() in ('1', 'true', 'yes', 'on')


def load_settings() -> Settings:
	"""
	Read settings from the environment.
	A missing API key is not an error here; the first upstream call will fail instead.
	"""
	load_dotenv()
	return Settings(
		api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY"),
		model=os.getenv("CINEREGIONAL_MODEL", DEFAULT_MODEL),
		include_global_stats=_env_flag("CINEREGIONAL_GLOBAL_STATS", True),
		api_url=os.getenv("CINEREGIONAL_API_URL", DEFAULT_API_URL),
	)
