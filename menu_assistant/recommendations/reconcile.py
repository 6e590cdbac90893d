"""
Map completion text back onto known menu items.

Two strategies, chosen by the calling endpoint:

- Name based: the completion is a numbered list with dish names in bold
  (``1. **Margherita Pizza** - $10``). Items whose title contains one of the
  extracted names are kept. No matching lines means no items.
- Id based: the completion is a JSON array of item ids, possibly inside a
  fenced code block. Output that does not parse into an array falls back to
  the full menu.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Protocol, Sequence

from ..errors import MalformedCompletionOutput
from ..menu.models import MenuItem, MenuRow, row_title
from .models import RecommendationResult

logger = logging.getLogger(__name__)

_NUMBERED_BOLD = re.compile(r"\d+\.\s+\*\*(.*?)\*\*")
_CODE_FENCE = re.compile(r"```json|```")


class MenuLookup(Protocol):
    def list_by_ids(self, ids: set[int]) -> list[MenuItem]: ...


def extract_names(text: str) -> list[str]:
    """Return lowercased bold names from numbered lines, in order of appearance."""
    names: list[str] = []
    for line in text.split("\n"):
        match = _NUMBERED_BOLD.search(line)
        if match:
            names.append(match.group(1).lower().strip())
    return names


def filter_by_names(text: str, menu: Sequence[MenuRow]) -> RecommendationResult:
    """Keep the rows whose title contains a recommended name. Rows are returned as given."""
    names = extract_names(text)
    logger.debug("Recommended names: %s", names)

    items = []
    for row in menu:
        title = row_title(row)
        if title is not None and any(name in title.lower() for name in names):
            items.append(row)
    return RecommendationResult(raw_text=text, items=items)


def extract_ids(text: str) -> list[int]:
    """
    Parse a JSON array of ids out of ``text``.

    Raises ``MalformedCompletionOutput`` if the text is not JSON or not an
    array. Non-integer elements are dropped.
    """
    cleaned = _CODE_FENCE.sub("", text).strip()
    try:
        parsed = json.loads(cleaned)
    # deeply nested input overflows the decoder stack
    except (ValueError, RecursionError) as exc:
        raise MalformedCompletionOutput(f"completion is not JSON: {exc}") from exc

    if not isinstance(parsed, list):
        raise MalformedCompletionOutput(
            f"expected a JSON array of ids, got {type(parsed).__name__}"
        )

    # bool is an int subclass; true/false are not ids
    return [v for v in parsed if isinstance(v, int) and not isinstance(v, bool)]


def recommend_by_ids(
    text: str,
    menu: Sequence[MenuRow],
    store: MenuLookup,
) -> RecommendationResult:
    try:
        ids = extract_ids(text)
    except MalformedCompletionOutput:
        logger.warning("Could not parse recommended ids, returning full menu", exc_info=True)
        return RecommendationResult(raw_text=text, items=list(menu))

    logger.debug("Recommended ids: %s", ids)
    return RecommendationResult(raw_text=text, items=store.list_by_ids(set(ids)))
