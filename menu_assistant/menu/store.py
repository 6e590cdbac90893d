from __future__ import annotations

import logging
from typing import Any, Iterable

from sqlalchemy import (
    Column,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    create_engine,
    func,
    or_,
    select,
    text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..errors import StoreUnavailable
from .models import MenuItem

logger = logging.getLogger(__name__)


def _menu_table(metadata: MetaData, table_name: str, title_column: str) -> Table:
    return Table(
        table_name,
        metadata,
        Column("id", Integer, primary_key=True),
        Column(title_column, String(255), key="title", nullable=False),
        Column("category", String(255)),
        Column("description", Text),
        Column("price", Numeric(10, 2)),
    )


class MenuStore:
    """Read-only access to the menu table."""

    def __init__(
        self,
        engine: Engine,
        table_name: str = "menu",
        title_column: str = "name",
    ) -> None:
        self.engine = engine
        self._metadata = MetaData()
        self.table = _menu_table(self._metadata, table_name, title_column)

    def create_schema(self) -> None:
        """Create the menu table if it does not exist."""
        self._metadata.create_all(self.engine)

    def ping(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise StoreUnavailable(f"Cannot connect to menu store: {exc}") from exc

    def list_all(self) -> list[MenuItem]:
        return self._fetch(select(self.table).order_by(self.table.c.id))

    def list_filtered(self, substring: str | None) -> list[MenuItem]:
        """
        Return rows whose title, category or description contains ``substring``,
        case-insensitively. An empty or missing filter returns the whole menu.
        """
        if not substring:
            return self.list_all()

        needle = substring.lower()
        c = self.table.c
        query = (
            select(self.table)
            .where(
                or_(
                    func.lower(c.title).contains(needle, autoescape=True),
                    func.lower(c.category).contains(needle, autoescape=True),
                    func.lower(c.description).contains(needle, autoescape=True),
                )
            )
            .order_by(c.id)
        )
        return self._fetch(query)

    def list_by_ids(self, ids: Iterable[int]) -> list[MenuItem]:
        id_set = set(ids)
        if not id_set:
            return []
        query = (
            select(self.table)
            .where(self.table.c.id.in_(sorted(id_set)))
            .order_by(self.table.c.id)
        )
        return self._fetch(query)

    def _fetch(self, query: Any) -> list[MenuItem]:
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(query).mappings().all()
        except SQLAlchemyError as exc:
            logger.error("Menu query failed", exc_info=True)
            raise StoreUnavailable(f"Menu query failed: {exc}") from exc
        return [self._row_to_item(row) for row in rows]

    def _row_to_item(self, row: Any) -> MenuItem:
        # Keyed by column object: the title column's name is configurable.
        c = self.table.c
        return MenuItem(
            id=row[c.id],
            title=row[c.title],
            category=row[c.category] or "",
            description=row[c.description] or "",
            price=row[c.price],
        )


def create_store(
    database_url: str,
    table_name: str = "menu",
    title_column: str = "name",
) -> MenuStore:
    """Build a ``MenuStore`` over a pooled engine for ``database_url``."""
    try:
        engine = create_engine(database_url, pool_pre_ping=True)
    except (SQLAlchemyError, ImportError) as exc:
        raise StoreUnavailable(f"Invalid menu store URL: {exc}") from exc
    return MenuStore(engine, table_name=table_name, title_column=title_column)
