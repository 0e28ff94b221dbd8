"""
Tests for environment settings. The .env loader is patched out so only the given variables count.
Run: python tests/test_config.py
"""

import os
import sys
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from cineregional import config
from cineregional.config import DEFAULT_API_URL, DEFAULT_MODEL, load_settings


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def settings_with(env):
	with patch.dict(os.environ, env, clear=True), patch("cineregional.config.load_dotenv") as dotenv:
		settings = load_settings()
	assert_equal(dotenv.called, True, ".env loaded first")
	return settings


def flag_with(env, default):
	with patch.dict(os.environ, env, clear=True):
		return config._env_flag("CINEREGIONAL_GLOBAL_STATS", default)


def test_defaults():
	settings = settings_with({})
	assert_equal(settings.api_key, None, "no key")
	assert_equal(settings.model, DEFAULT_MODEL, "default model")
	assert_equal(settings.include_global_stats, True, "stats block on by default")
	assert_equal(settings.api_url, DEFAULT_API_URL, "default API URL")


def test_api_key_fallback():
	assert_equal(settings_with({"API_KEY": "k2"}).api_key, "k2", "API_KEY fallback")
	assert_equal(settings_with({"GEMINI_API_KEY": "k1", "API_KEY": "k2"}).api_key, "k1", "GEMINI_API_KEY wins")
	assert_equal(settings_with({"GEMINI_API_KEY": "", "API_KEY": "k2"}).api_key, "k2", "empty GEMINI_API_KEY ignored")


def test_overrides():
	settings = settings_with({
		"CINEREGIONAL_MODEL": "gemini-custom",
		"CINEREGIONAL_GLOBAL_STATS": "false",
		"CINEREGIONAL_API_URL": "http://api:9000",
	})
	assert_equal(settings.model, "gemini-custom", "model override")
	assert_equal(settings.include_global_stats, False, "two-block prompt")
	assert_equal(settings.api_url, "http://api:9000", "API URL override")


def test_env_flag():
	assert_equal(flag_with({}, True), True, "absent uses default")
	assert_equal(flag_with({"CINEREGIONAL_GLOBAL_STATS": "   "}, False), False, "blank uses default")
	for raw in ("1", "true", "YES", " on "):
		assert_equal(flag_with({"CINEREGIONAL_GLOBAL_STATS": raw}, False), True, f"{raw!r} is on")
	for raw in ("0", "false", "off", "maybe"):
		assert_equal(flag_with({"CINEREGIONAL_GLOBAL_STATS": raw}, True), False, f"{raw!r} is off")


def main():
	print("Running config tests...")
	test_defaults()
	test_api_key_fallback()
	test_overrides()
	test_env_flag()
	print("All config tests passed!")


if __name__ == '__main__':
	main()
