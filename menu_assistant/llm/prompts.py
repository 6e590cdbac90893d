from __future__ import annotations

import json
from typing import Sequence

from ..menu.models import MenuItem, MenuRow


def _menu_json(menu: Sequence[MenuRow]) -> str:
    return json.dumps([
        row.model_dump(mode="json") if isinstance(row, MenuItem) else row
        for row in menu
    ])


def build_order_prompt(prompt: str, menu: Sequence[MenuItem]) -> str:
    """Free-form ordering assistant prompt; the reply is returned verbatim."""
    return (
        "You are an AI assistant for a restaurant. "
        f'The user says: "{prompt}". '
        f"Here's our menu: {_menu_json(menu)}. "
        "Please help the user order by suggesting items, answering questions "
        "about the menu, or assisting with their order. If they want to order, "
        "confirm the items and total price."
    )


def build_recommendation_prompt(message: str, menu: Sequence[MenuRow]) -> str:
    """Asks for a numbered list with dish names in bold, parsed by name."""
    return (
        "You are a food ordering chatbot. "
        f'The user\'s message is: "{message}". '
        f"Here's the menu: {_menu_json(menu)}. "
        "Recommend dishes based on the user's message and the available menu "
        "items. Format your response as a numbered list with the recommended "
        "dishes in bold, including their prices."
    )


def build_id_prompt(prompt: str, menu: Sequence[MenuItem]) -> str:
    """Asks for a bare JSON array of menu item ids."""
    return (
        "You are an AI assistant for a restaurant. "
        f'The user says: "{prompt}". '
        f"Here's our menu: {_menu_json(menu)}. "
        "Please recommend suitable menu items based on the user's request. "
        "Return only the IDs of the recommended items as a JSON array. "
        "Do not include any additional text or formatting in your response, "
        "just the JSON array."
    )
