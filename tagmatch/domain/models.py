"""Game header model consumed by the command-line harness.

GameHeaders is the validated form of one record read from a headers file:
a mapping of PGN tag names to their string values.
"""

from typing import Dict

from pydantic import BaseModel, Field, field_validator


class GameHeaders(BaseModel):
    """Header fields of a single game."""

    tags: Dict[str, str] = Field(default_factory=dict, description="Tag name to value")

    @field_validator("tags", mode="before")
    @classmethod
    def stringify_values(cls, v):
        """Accept numbers (e.g. Elo ratings) and strip tag names."""
        if not isinstance(v, dict):
            raise ValueError("Game headers must be an object of tag name to value")
        cleaned = {}
        for name, value in v.items():
            key = str(name).strip()
            if not key:
                raise ValueError("Tag name cannot be empty or whitespace-only")
            if value is None:
                continue
            cleaned[key] = str(value)
        return cleaned

    def get(self, name: str):
        """Return the value of a tag, or None if the game lacks it."""
        return self.tags.get(name)

    model_config = {"json_schema_extra": {"example": {
        "tags": {
            "Event": "Linares",
            "Date": "1994.02.25",
            "White": "Karpov, Anatoly",
            "Black": "Topalov, Veselin",
            "Result": "1-0",
            "WhiteElo": "2740",
            "BlackElo": "2640",
            "ECO": "B63",
        },
    }}}
