"""
Tests for SearchController: state transitions and stale completions.
Run: python tests/test_controller.py
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from cineregional.analyzer import AnalysisError
from cineregional.controller import SearchController, SearchPhase, UNEXPECTED_ERROR_MESSAGE
from cineregional.models import MovieAnalysis


class FakeAnalyzer:
	def __init__(self, error=None):
		self.error = error
		self.titles = []

	def analyze(self, title):
		self.titles.append(title)
		if self.error is not None:
			raise self.error
		return MovieAnalysis(title=title, summary=f"About {title}")


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def assert_true(cond, msg):
	if not cond:
		raise AssertionError(msg)


def test_idle_to_result():
	controller = SearchController(FakeAnalyzer())
	assert_equal(controller.state.phase, SearchPhase.IDLE, "starts idle")
	state = controller.submit("  Dune: Part Two ")
	assert_equal(state.phase, SearchPhase.RESULT, "result phase")
	assert_equal(state.result.title, "Dune: Part Two", "trimmed title searched")
	assert_equal(state.error, None, "no error")
	assert_true(not controller.is_busy, "not busy after completion")


def test_blank_query_is_noop():
	analyzer = FakeAnalyzer()
	controller = SearchController(analyzer)
	state = controller.submit("   ")
	assert_equal(state.phase, SearchPhase.IDLE, "still idle")
	assert_equal(state.ticket, 0, "no ticket issued")
	assert_equal(analyzer.titles, [], "analyzer not called")


def test_upstream_error_message_verbatim():
	controller = SearchController(FakeAnalyzer(error=AnalysisError("quota exceeded")))
	state = controller.submit("Alien")
	assert_equal(state.phase, SearchPhase.ERROR, "error phase")
	assert_equal(state.error, "quota exceeded", "message surfaced as-is")
	assert_equal(state.result, None, "no result on failure")


def test_unexpected_error_message():
	controller = SearchController(FakeAnalyzer(error=RuntimeError("boom")))
	state = controller.submit("Alien")
	assert_equal(state.phase, SearchPhase.ERROR, "error phase")
	assert_true(state.error.startswith(UNEXPECTED_ERROR_MESSAGE), "generic prefix")


def test_error_then_new_search():
	analyzer = FakeAnalyzer(error=AnalysisError("down"))
	controller = SearchController(analyzer)
	controller.submit("Alien")
	analyzer.error = None
	state = controller.submit("Aliens")
	assert_equal(state.phase, SearchPhase.RESULT, "recovered on next search")
	assert_equal(state.result.title, "Aliens", "new result shown")


def test_latest_request_wins():
	controller = SearchController(FakeAnalyzer())
	first = controller.begin("Alien")
	second = controller.begin("Aliens")
	assert_true(controller.is_busy, "busy while in flight")

	# The older search finishes last-but-one: it must not clobber anything
	assert_true(not controller.resolve(first, MovieAnalysis(title="Alien", summary="old")), "stale result dropped")
	assert_equal(controller.state.phase, SearchPhase.SEARCHING, "still waiting for latest")
	assert_true(not controller.fail(first, "late error"), "stale error dropped")

	assert_true(controller.resolve(second, MovieAnalysis(title="Aliens", summary="new")), "latest applied")
	assert_equal(controller.state.result.title, "Aliens", "latest result shown")

	# A response for an old ticket arriving after the latest one is also ignored
	assert_true(not controller.resolve(first, MovieAnalysis(title="Alien", summary="old")), "late stale result dropped")
	assert_equal(controller.state.result.title, "Aliens", "result unchanged")


def test_state_is_a_snapshot():
	controller = SearchController(FakeAnalyzer())
	snapshot = controller.state
	snapshot.phase = SearchPhase.ERROR
	assert_equal(controller.state.phase, SearchPhase.IDLE, "internal state untouched")


def main():
	print("Running controller tests...")
	test_idle_to_result()
	test_blank_query_is_noop()
	test_upstream_error_message_verbatim()
	test_unexpected_error_message()
	test_error_then_new_search()
	test_latest_request_wins()
	test_state_is_a_snapshot()
	print("All controller tests passed!")


if __name__ == '__main__':
	main()
