"""
Streamlit UI for CineRegional.
Calls the local FastAPI server at http://localhost:8000 to analyze a movie,
or runs the analysis in-process with the Gemini key from the environment.

Run API (optional):   uvicorn api:app --reload
Run UI:                streamlit run streamlit_app.py
"""

# HTTP client to call the API when running in API mode
import requests  # make web requests to the FastAPI server
# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives
# Tabular data and charts for the breakdowns
import pandas as pd  # frames for charts/tables
import altair as alt  # bar chart

# Project imports for both modes
from cineregional.analyzer import AnalysisError, MovieAnalyzer  # in-process pipeline
from cineregional.config import load_settings  # environment settings
from cineregional.controller import SearchController, SearchPhase  # idle/searching/result/error
from cineregional.models import MovieAnalysis  # result record
from cineregional.presentation import as_percent, display_text, platform_list, regional_chart_rows, table_rows  # value-tolerant display helpers

from loguru import logger  # console logging


class RemoteAnalyzer:
	"""Same interface as MovieAnalyzer, backed by the FastAPI /analyze endpoint."""

	def __init__(self, api_url: str, timeout: int = 120):
		self.api_url = api_url.rstrip('/')  # base URL
		self.timeout = timeout  # seconds; the upstream search can be slow

	def analyze(self, title: str) -> MovieAnalysis:
		try:
			resp = requests.get(f"{self.api_url}/analyze", params={"title": title}, timeout=self.timeout)
		except requests.RequestException as e:  # network errors
			logger.error(f"[UI] API request failed: {e}")
			raise AnalysisError(f"API request failed: {e}") from e
		if not resp.ok:
			try:
				detail = resp.json().get('detail')  # FastAPI error body
			except ValueError:
				detail = None
			raise AnalysisError(str(detail or f"API responded with HTTP {resp.status_code}"))
		return MovieAnalysis.from_dict(resp.json())


settings = load_settings()  # env/.env settings

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="CineRegional", page_icon="🎬", layout="wide")  # wide layout

# Main page title
st.title("🎬 CineRegional – Global Movie Market Insights")  # friendly header
st.caption("Regional box office, streaming availability and popularity trends, grounded in live Google Search.")

# Sidebar contains configuration controls
with st.sidebar:
	st.header("Settings")  # section label
	api_url = st.text_input("API URL", settings.api_url)  # where the API lives
	use_local = st.toggle("Use local analyzer", value=False, help="If enabled or API is unreachable, the app calls Gemini directly.")

# If not forcing local, check quickly whether the API is reachable
api_available = False  # default assumption
if not use_local:
	try:
		h = requests.get(f"{api_url}/health", timeout=3)  # ping API health endpoint
		api_available = h.ok  # True if server responded 200 OK
	except requests.RequestException:
		api_available = False  # probe failed
		st.sidebar.info("API not reachable; will use local analyzer.")  # inform user

mode = 'local' if (use_local or not api_available) else f'api:{api_url}'  # controller is rebuilt when this changes
if st.session_state.get('mode') != mode or 'controller' not in st.session_state:
	analyzer = MovieAnalyzer.from_settings() if mode == 'local' else RemoteAnalyzer(api_url)
	st.session_state['controller'] = SearchController(analyzer)
	st.session_state['mode'] = mode
controller: SearchController = st.session_state['controller']

# Search form: one text field and one submit control
with st.form("search"):
	query = st.text_input("Movie title", placeholder="Enter movie title (e.g., Dune: Part Two, Avengers, Godzilla...)")
	submitted = st.form_submit_button("Analyze", type="primary", disabled=controller.is_busy)

if submitted and query.strip():
	with st.spinner("Fetching global data and search results..."):
		controller.submit(query)

state = controller.state

if state.phase == SearchPhase.ERROR:
	st.error(state.error)  # message surfaced verbatim

if state.result is None:
	if state.phase == SearchPhase.IDLE:
		st.info("Search for a movie to see analysis")  # idle placeholder
else:
	data = state.result
	st.header(data.title)

	# Global stats row
	if data.globalStats is not None:
		s = data.globalStats
		c1, c2, c3, c4 = st.columns(4)
		c1.metric("💰 Total Box Office", display_text(s.totalBoxOffice))
		c2.metric("✍️ Critics Score", f"{display_text(s.criticScore)}%")
		c3.metric("🍿 Audience Score", f"{display_text(s.audienceScore)}%")
		c4.metric("🌍 Reach Index", f"{display_text(s.globalReachIndex)}/10")
		st.caption(f"Release status: {display_text(s.releaseStatus)}")

	overview_tab, regional_tab, continental_tab, sources_tab = st.tabs(["Overview", "Regional", "Continental", "Sources"])

	with overview_tab:
		st.write(data.summary)
		if data.globalHighlights:
			st.subheader("Global highlights")
			for h in data.globalHighlights:
				st.markdown(f"- {h}")
		else:
			st.caption("No highlights available.")

	with regional_tab:
		if not data.regionalBreakdown:
			st.caption("No regional data available.")
		else:
			chart_rows = regional_chart_rows(data.regionalBreakdown)  # numeric amounts only
			if chart_rows:
				chart = alt.Chart(pd.DataFrame(chart_rows)).mark_bar().encode(
					x=alt.X('region:N', sort='-y', title='Region'),
					y=alt.Y('boxOffice:Q', title='Box office (USD M)'),
					tooltip=['region', 'boxOffice', 'popularityScore'],
				)
				st.altair_chart(chart, use_container_width=True)

			st.subheader("Popularity")
			for r in data.regionalBreakdown:
				pct = as_percent(r.popularityScore)
				if pct is None:
					st.write(f"{display_text(r.region)}: {display_text(r.popularityScore)}")
				else:
					st.progress(pct, text=f"{display_text(r.region)}: {display_text(r.popularityScore)}")

			st.subheader("Streaming availability")
			for r in data.regionalBreakdown:
				st.write(f"**{display_text(r.region)}**: {', '.join(platform_list(r.availability)) or '—'}")

	with continental_tab:
		if not data.continentalBreakdown:
			st.caption("No continental data available.")
		else:
			st.dataframe(pd.DataFrame(table_rows(data.continentalBreakdown)), hide_index=True, use_container_width=True)
			for c in data.continentalBreakdown:
				pct = as_percent(c.marketShare)
				if pct is not None:
					st.progress(pct, text=f"{display_text(c.continent)} ({display_text(c.status)}) – top: {display_text(c.topCountry)}")

	with sources_tab:
		if not data.sources:
			st.caption("No sources returned.")
		for src in data.sources:
			st.markdown(f"[{src.title}]({src.uri})")

# Show a footer indicator of current mode
st.sidebar.markdown("---")  # separator
if mode == 'local':
	st.sidebar.caption(f"Mode: Local analyzer ({settings.model})")  # mode label
else:
	st.sidebar.caption("Mode: API client (ensure uvicorn api:app --reload is running)")  # mode label
