"""Pydantic model for the JSON object printed for the status bar."""

from __future__ import annotations

from pydantic import BaseModel, Field

DEGRADED_VALUE = "N/A"


class BarOutput(BaseModel):
    """The two string fields a Waybar custom module reads from stdout."""

    text: str = Field(..., description="Compact next-event label")
    tooltip: str = Field(..., description="Multi-line schedule shown on hover")

    model_config = {"frozen": True}

    @classmethod
    def degraded(cls) -> BarOutput:
        """Fallback emitted when no real data can be produced."""
        return cls(text=DEGRADED_VALUE, tooltip=DEGRADED_VALUE)

    @property
    def is_degraded(self) -> bool:
        return self.text == DEGRADED_VALUE and self.tooltip == DEGRADED_VALUE

    def to_json(self) -> str:
        return self.model_dump_json()
