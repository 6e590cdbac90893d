from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from menu_assistant.app import create_app
from menu_assistant.llm.gemini_client import GeminiClient
from menu_assistant.menu.store import MenuStore
from menu_assistant.recommendations.cache import PromptCache

SAMPLE_ROWS = [
    {"id": 1, "title": "Veggie Pizza", "category": "Pizza", "description": "Tomato, peppers and olives", "price": Decimal("11.50")},
    {"id": 2, "title": "Salad", "category": "Starters", "description": "Mixed greens", "price": Decimal("6.00")},
    {"id": 3, "title": "Margherita Pizza Supreme", "category": "Pizza", "description": "Buffalo mozzarella and basil", "price": Decimal("12.00")},
    {"id": 4, "title": "Greek Salad", "category": "Starters", "description": "Feta, cucumber and olives", "price": Decimal("7.50")},
]


def make_engine():
    # One shared in-memory connection, usable from the TestClient threadpool
    return create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


def seed_store(store: MenuStore, rows=SAMPLE_ROWS) -> MenuStore:
    store.create_schema()
    with store.engine.begin() as conn:
        conn.execute(store.table.insert(), rows)
    return store


@pytest.fixture
def store():
    engine = make_engine()
    yield seed_store(MenuStore(engine))
    engine.dispose()


@pytest.fixture
def completion() -> MagicMock:
    return MagicMock(spec=GeminiClient)


@pytest.fixture
def cache() -> PromptCache:
    return PromptCache()


@pytest.fixture
def client(store, completion, cache):
    app = create_app(store=store, completion_client=completion, cache=cache)
    with TestClient(app) as c:
        yield c
