"""
Prompt templates for the movie market analysis request.
The markers below are the contract between the prompt and the extraction module.
"""

# Block markers the model is told to place right before each JSON block
DATA_BLOCK = "DATA_BLOCK"  # regional breakdown array
CONTINENTAL_BLOCK = "CONTINENTAL_BLOCK"  # continental breakdown array
GLOBAL_STATS = "GLOBAL_STATS"  # worldwide stats object

# Example shapes shown to the model so its JSON matches our records
REGIONAL_EXAMPLE = '{"region": "USA", "boxOffice": 282.1, "popularityScore": 92, "availability": ["Max", "Apple TV"]}'
CONTINENTAL_EXAMPLE = '{"continent": "Asia", "marketShare": 45, "status": "Hyper-growth", "topCountry": "China"}'
GLOBAL_STATS_EXAMPLE = (
	'{"totalBoxOffice": "$711M", "criticScore": 92, "audienceScore": 95, '
	'"globalReachIndex": 8, "releaseStatus": "Streaming"}'
)

CONTINENTS = ["Africa", "Asia", "Europe", "North America", "South America", "Oceania"]

_ANALYSIS_TEMPLATE = """
Using GOOGLE SEARCH as your primary data source, analyze the movie "{title}" with a focus on current regional and continental performance.

IMPORTANT: You MUST use real-time search results to find:
1. A concise, current summary of the movie's status.
2. Global market highlights based on recent news, as a bullet list ("- " per highlight).
3. A detailed Regional Breakdown for specific major markets (e.g., USA, China, UK, Japan).
4. A CONTINENTAL breakdown summarizing performance across {continents}.

Structure your response clearly, numbering the sections 1. to 4. exactly as above.
End with {block_count} JSON blocks:
- {data_block}: Array of RegionalData objects.
- {continental_block}: Array of ContinentalData objects.
{stats_line}
RegionalData format: {regional_example}
ContinentalData format: {continental_example}
{stats_format}"""


def build_analysis_prompt(title: str, include_global_stats: bool = True) -> str:
	"""
	Render the search-grounded instruction for one movie.

	With include_global_stats=False the GLOBAL_STATS block is not requested,
	which is the prompt variant where MovieAnalysis.globalStats stays empty.
	"""
	stats_line = f"- {GLOBAL_STATS}: A single GlobalStats object.\n" if include_global_stats else ""
	stats_format = f"GlobalStats format: {GLOBAL_STATS_EXAMPLE}\n" if include_global_stats else ""
	return _ANALYSIS_TEMPLATE.format(
		title=title,
		continents=", ".join(CONTINENTS[:-1]) + f", and {CONTINENTS[-1]}",
		block_count="three" if include_global_stats else "two",
		data_block=DATA_BLOCK,
		continental_block=CONTINENTAL_BLOCK,
		stats_line=stats_line,
		regional_example=REGIONAL_EXAMPLE,
		continental_example=CONTINENTAL_EXAMPLE,
		stats_format=stats_format,
	)
