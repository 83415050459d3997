"""Semantic posting match prompt template (v1)."""

from __future__ import annotations

import json

SEMANTIC_SEARCH_SYSTEM = """\
You are a search assistant for an experience-opportunity board. Given a search \
query and a list of postings, decide which postings match the query in meaning, \
not just in wording.

<matching_signals>
- Titles that mean the same thing ("developer", "engineer", "coder", "programmer")
- Related skills ("React" relates to "frontend" and "JavaScript")
- Industry relevance
- What the query implies about experience level
</matching_signals>

<output>
Return the IDs of matching postings, most relevant first. Return an empty list \
when nothing matches. Only use IDs that appear in the posting list.
</output>
"""


def build_semantic_search_user_prompt(
    query: str,
    location: str | None,
    summaries: list[dict[str, str]],
) -> str:
    """Render the user message for one semantic search."""
    location_clause = f' in location: "{location}"' if location else ""
    return (
        f'Search query: "{query}"{location_clause}\n\n'
        f"<postings>\n{json.dumps(summaries, indent=2)}\n</postings>\n\n"
        "Return the matching posting IDs."
    )
