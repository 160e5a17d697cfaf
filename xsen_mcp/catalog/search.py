"""Query matching over a catalog snapshot."""

from enum import Enum

from xsen_mcp.models.catalog import Catalog, CatalogEntry, Match, SearchResults

DEFAULT_LIMIT = 3
TITLE_WEIGHT = 2
DESCRIPTION_WEIGHT = 1


class SearchMode(str, Enum):
    """Available matching strategies."""

    SCORED = "scored"
    SUBSTRING = "substring"


def normalize_query(query: str | None) -> str:
    return (query or "").strip().lower()


def tokenize(query: str) -> list[str]:
    """Split a normalized query into unique words, keeping first-seen order."""
    return list(dict.fromkeys(query.split()))


def score_entry(entry: CatalogEntry, words: list[str]) -> int:
    """
    Weighted count of query words found in an entry.

    Each word contributes TITLE_WEIGHT when it occurs anywhere in the title and
    DESCRIPTION_WEIGHT when it occurs anywhere in the description.
    """
    title = entry.title.lower()
    description = entry.description.lower()
    score = 0
    for word in words:
        if word in title:
            score += TITLE_WEIGHT
        if word in description:
            score += DESCRIPTION_WEIGHT
    return score


def _effective_limit(limit: int | None) -> int:
    if limit is None or limit < 1:
        return DEFAULT_LIMIT
    return limit


def rank(catalog: Catalog, query: str | None, limit: int | None = DEFAULT_LIMIT) -> SearchResults:
    """
    Scores every entry against the query words and returns the best `limit` matches.

    Entries scoring zero are dropped. Ties keep catalog order.
    """
    normalized = normalize_query(query)
    words = tokenize(normalized)
    if not words:
        return SearchResults.empty_query()

    scored = [Match(entry=entry, score=score_entry(entry, words)) for entry in catalog]
    # sorted() is stable, so equal scores stay in catalog order
    ranked = sorted((m for m in scored if m.score > 0), key=lambda m: m.score, reverse=True)
    return SearchResults(query=normalized, matches=tuple(ranked[: _effective_limit(limit)]))


def substring_search(
    catalog: Catalog, query: str | None, limit: int | None = DEFAULT_LIMIT
) -> SearchResults:
    """
    Returns the first `limit` entries whose title or description contains the whole query.
    """
    normalized = normalize_query(query)
    if not normalized:
        return SearchResults.empty_query()

    matches: list[Match] = []
    wanted = _effective_limit(limit)
    for entry in catalog:
        if normalized in entry.title.lower() or normalized in entry.description.lower():
            matches.append(Match(entry=entry, score=1))
            if len(matches) == wanted:
                break
    return SearchResults(query=normalized, matches=tuple(matches))


def search(
    catalog: Catalog,
    query: str | None,
    limit: int | None = DEFAULT_LIMIT,
    mode: SearchMode = SearchMode.SCORED,
) -> SearchResults:
    """Runs the query with the requested strategy."""
    if SearchMode(mode) is SearchMode.SUBSTRING:
        return substring_search(catalog, query, limit)
    return rank(catalog, query, limit)
