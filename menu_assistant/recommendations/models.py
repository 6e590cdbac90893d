from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

from ..menu.models import MenuRow


@dataclass(frozen=True)
class RecommendationResult:
    raw_text: str
    items: list[MenuRow]


class ChatRequest(BaseModel):
    message: str | None = Field(default=None, min_length=1)
    prompt: str | None = Field(default=None, min_length=1)
    menu: list[dict[str, Any]] | None = Field(
        default=None,
        description="Menu rows to recommend from, passed through as-is; defaults to the stored menu",
    )

    @model_validator(mode="after")
    def _require_message_or_prompt(self) -> "ChatRequest":
        if self.message is None and self.prompt is None:
            raise ValueError("either 'message' or 'prompt' is required")
        return self


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response: str
    recommended_menu: list[dict[str, Any]] | None = Field(default=None, alias="recommendedMenu")

    @model_serializer(mode="wrap")
    def _omit_missing_menu(self, handler: Any) -> dict[str, Any]:
        # Only the top-level key is dropped; None values inside rows are kept
        data = handler(self)
        if self.recommended_menu is None:
            data.pop("recommendedMenu", None)
            data.pop("recommended_menu", None)
        return data


class RecommendRequest(BaseModel):
    prompt: str = Field(..., min_length=1)


class ErrorResponse(BaseModel):
    error: str
    details: str
