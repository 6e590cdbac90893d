from __future__ import annotations

from decimal import Decimal
from typing import Any, Union

from pydantic import BaseModel, ConfigDict


class MenuItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    category: str = ""
    description: str = ""
    price: Decimal | None = None


# A row of a client-supplied menu, kept exactly as received.
MenuRow = Union[MenuItem, dict[str, Any]]

_TITLE_KEYS = ("title", "name", "productTitle")


def row_title(row: MenuRow) -> str | None:
    """Title of a stored item, or of a client row keyed by title/name/productTitle."""
    if isinstance(row, MenuItem):
        return row.title
    for key in _TITLE_KEYS:
        value = row.get(key)
        if value is not None:
            return str(value)
    return None
