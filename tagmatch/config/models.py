"""Configuration schema models using Pydantic."""

import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from tagmatch.matching.engine import SELECTOR_TAGS
from tagmatch.matching.models import MatchSettings, Operator, SetupStatus


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class SettingsConfig(BaseModel):
    """Matching switches shared by all criteria."""

    soundex: bool = Field(False, description="Phonetic matching of player, event, site and annotator")
    match_anywhere: bool = Field(
        False, description="Plain criteria may occur anywhere in the tag value"
    )
    setup: SetupStatus = Field(
        SetupStatus.ANY, description="SetUp tag rule: any, absent or present"
    )

    def to_match_settings(self) -> MatchSettings:
        """Build the engine's MatchSettings from this section."""
        return MatchSettings(
            use_soundex=self.soundex,
            match_anywhere=self.match_anywhere,
            setup_status=self.setup,
        )


class CriterionConfig(BaseModel):
    """One criterion: a tag name, an optional operator and a value."""

    tag: str = Field(..., min_length=1, description="PGN tag name, e.g. WhiteElo")
    value: str = Field(..., description="Value to compare with")
    operator: Optional[str] = Field(
        None, description="One of = <> < <= > >= ~ (omit for a plain text match)"
    )

    @field_validator("tag")
    @classmethod
    def strip_tag(cls, v: str) -> str:
        """Strip whitespace from the tag name."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Tag name cannot be empty or whitespace-only")
        return stripped

    @field_validator("value", mode="before")
    @classmethod
    def stringify_value(cls, v):
        """Accept bare numbers such as 2600 for the value."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("operator")
    @classmethod
    def validate_operator(cls, v: Optional[str]) -> Optional[str]:
        """Reject operators the engine does not know."""
        if v is not None:
            Operator.parse(v)
        return v

    @property
    def parsed_operator(self) -> Operator:
        return Operator.parse(self.operator)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class FilterConfig(BaseModel):
    """Root configuration: settings plus the criteria to register."""

    settings: SettingsConfig = Field(default_factory=SettingsConfig)
    criteria: List[CriterionConfig] = Field(default_factory=list)
    selectors: List[str] = Field(
        default_factory=list,
        description="Shorthand criteria: selector letter followed by the value",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("selectors")
    @classmethod
    def validate_selectors(cls, v: List[str]) -> List[str]:
        """Each selector must start with a known letter."""
        for argument in v:
            letter = argument[:1]
            if letter not in SELECTOR_TAGS:
                known = ", ".join(sorted(SELECTOR_TAGS))
                raise ValueError(
                    f"Unknown selector '{argument}': must start with one of {known}"
                )
        return v

    @model_validator(mode="after")
    def validate_regex_criteria(self):
        """Regular expressions must compile where they are used."""
        for criterion in self.criteria:
            if criterion.parsed_operator is Operator.REGEX:
                try:
                    re.compile(criterion.value)
                except re.error as e:
                    raise ValueError(
                        f"Invalid regular expression for {criterion.tag}: '{criterion.value}' ({e})"
                    ) from e
        return self

    def criteria_count(self) -> int:
        """Total number of criteria and selectors."""
        return len(self.criteria) + len(self.selectors)
