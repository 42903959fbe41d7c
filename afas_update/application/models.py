"""Request models for rendering update payloads from files."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..constants import Actions
from ..domain.services.element_validator import normalize_action


class UpdateRequest(BaseModel):
    """One object to render: its type, its action and its element data."""

    type: str = Field(min_length=1)
    action: str = Actions.NONE
    elements: dict[str, Any] | list[dict[str, Any]]

    @field_validator("action")
    @classmethod
    def _known_action(cls, value: str) -> str:
        normalized = normalize_action(value)
        if normalized is None:
            raise ValueError(f"unknown action {value!r}")
        return normalized
