from __future__ import annotations

import json
from decimal import Decimal

from menu_assistant.llm.prompts import (
    build_id_prompt,
    build_order_prompt,
    build_recommendation_prompt,
)
from menu_assistant.menu.models import MenuItem

MENU = [MenuItem(id=1, title="Veggie Pizza", category="Pizza", description="Peppers", price=Decimal("11.50"))]
MENU_JSON = json.dumps([{"id": 1, "title": "Veggie Pizza", "category": "Pizza", "description": "Peppers", "price": "11.50"}])


def test_order_prompt_embeds_prompt_and_menu():
    prompt = build_order_prompt("I want something cheesy", MENU)
    assert '"I want something cheesy"' in prompt
    assert MENU_JSON in prompt
    assert "total price" in prompt


def test_recommendation_prompt_asks_for_numbered_bold_list():
    prompt = build_recommendation_prompt("vegetarian please", MENU)
    assert '"vegetarian please"' in prompt
    assert MENU_JSON in prompt
    assert "numbered list" in prompt
    assert "bold" in prompt


def test_id_prompt_asks_for_json_array():
    prompt = build_id_prompt("spicy", MENU)
    assert '"spicy"' in prompt
    assert MENU_JSON in prompt
    assert "JSON array" in prompt


def test_client_rows_embedded_as_received():
    rows = [{"productTitle": "Tiramisu", "productPrice": 6, "image": "t.png"}]
    prompt = build_recommendation_prompt("dessert", rows)
    assert json.dumps(rows) in prompt
