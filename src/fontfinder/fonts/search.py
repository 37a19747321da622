"""
Query Resolver
==============

Resolves batches of family/style requests against an indexed family list.

A batch is first coalesced per family, then every family is looked up by
exact name. The resolver holds no state between calls.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import InvalidSearchQueryError
from ..core.models import MissingFont, ResolvedFont, SearchQuery, SearchResult
from .models import FamilyEntry

logger = logging.getLogger(__name__)

QueryLike = SearchQuery | Mapping


@dataclass
class _PendingQuery:
    family: str
    styles: list[str] | None


def coerce_query(query: QueryLike) -> SearchQuery:
    """Validate a query given as a model or a plain mapping."""
    if isinstance(query, SearchQuery):
        return query
    if not isinstance(query, Mapping):
        raise InvalidSearchQueryError(query, "expected a mapping with a 'family' key")
    try:
        return SearchQuery.model_validate(dict(query))
    except PydanticValidationError as e:
        raise InvalidSearchQueryError(query, str(e)) from e


def normalize_queries(queries: Iterable[QueryLike]) -> list[SearchQuery]:
    """Coalesce a batch of queries into one query per family.

    Families keep the order in which they were first requested. A request
    without style asks for all styles and replaces any narrower request for
    the same family; style lists are merged without duplicates.
    """
    pending: list[_PendingQuery] = []
    for raw in queries:
        query = coerce_query(raw)
        styles = query.styles

        for existing in pending:
            if existing.family == query.family:
                if styles is None:
                    existing.styles = None
                elif existing.styles is not None:
                    for style in styles:
                        if style not in existing.styles:
                            existing.styles.append(style)
                break
        else:
            pending.append(_PendingQuery(family=query.family, styles=styles))

    return [SearchQuery(family=p.family, style=p.styles) for p in pending]


def find_family(fonts: Iterable[FamilyEntry], family: str) -> FamilyEntry | None:
    """First entry whose family equals ``family`` exactly."""
    for entry in fonts:
        if entry.family == family:
            return entry
    return None


def search_fonts(fonts: Sequence[FamilyEntry], queries: Iterable[QueryLike]) -> SearchResult:
    """Resolve queries against indexed families.

    Args:
        fonts: Indexed family entries
        queries: ``SearchQuery`` objects or mappings with ``family`` and
            optional ``style`` (a name or a list of names)

    Returns:
        Found and missing fonts, in query order
    """
    found: list[ResolvedFont] = []
    missing: list[MissingFont] = []

    for query in normalize_queries(queries):
        family = query.family
        styles = query.styles
        entry = find_family(fonts, family)

        if entry is None:
            if styles is None:
                missing.append(MissingFont(family=family))
            else:
                missing.extend(MissingFont(family=family, style=style) for style in styles)
            continue

        if styles is None:
            found.extend(
                ResolvedFont(family=family, style=style, file=file)
                for style, file in entry.files.items()
            )
            continue

        for style in styles:
            file = entry.files.get(style)
            if file:
                found.append(ResolvedFont(family=family, style=style, file=file))
            else:
                missing.append(MissingFont(family=family, style=style))

    logger.debug(f"Search resolved {len(found)} fonts, {len(missing)} missing")
    return SearchResult(found=found, missing=missing)
