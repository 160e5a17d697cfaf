"""Turns search matches into the text returned by the xsen_search tool."""

from collections.abc import Iterable
from html import escape

from xsen_mcp.catalog.urls import embed_url
from xsen_mcp.models.catalog import Match

EMPTY_QUERY_PROMPT = (
    "Tell me what you'd like to watch: a player, a game, a season, or a moment "
    "from OU Sooners history."
)
NO_RESULTS_MESSAGE = "No XSEN videos found for that search. Try a different player, opponent, or season."
CLOSING_PROMPT = "Want to see more? Ask for another player, game, or season and I'll pull up the highlights."
CATALOG_LOADING_MESSAGE = "The XSEN video library is still loading. Please try again in a moment."

IFRAME_TEMPLATE = (
    '<iframe src="{src}" width="560" height="315" frameborder="0" '
    'allow="autoplay; encrypted-media; picture-in-picture" allowfullscreen></iframe>'
)


def render_match(match: Match, player_base_url: str) -> str:
    entry = match.entry
    parts = [
        f"### {entry.display_title}",
        IFRAME_TEMPLATE.format(src=escape(embed_url(player_base_url, entry.video_id), quote=True)),
    ]
    if entry.description:
        parts.append(f"> {entry.description}")
    return "\n\n".join(parts)


def render(matches: Iterable[Match], player_base_url: str) -> str:
    """
    Renders each match as a heading, an embedded player and its description.

    Matches without a recognizable video id are skipped. Returns NO_RESULTS_MESSAGE
    when nothing is left to show.
    """
    blocks = [render_match(m, player_base_url) for m in matches if m.entry.video_id]
    if not blocks:
        return NO_RESULTS_MESSAGE
    return "\n\n".join([*blocks, CLOSING_PROMPT])
