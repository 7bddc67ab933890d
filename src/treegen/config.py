from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import InvalidConfiguration, UnsupportedFormat

MAX_SEED = 2**64


class OutputFormat(str, Enum):
    DOT = "dot"
    MERMAID = "mermaid"
    BOTH = "both"

    @classmethod
    def parse(cls, value: str | OutputFormat) -> OutputFormat:
        """Resolve a format name, raising UnsupportedFormat for unknown values."""
        if isinstance(value, OutputFormat):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedFormat(str(value), [f.value for f in cls]) from None


# ─────────────────────────────────────────────────────────────
# Generation parameters
# ─────────────────────────────────────────────────────────────


class GenerationConfig(BaseModel):
    """
    Parameters controlling the shape of a generated tree.

    Width parameters describe the target number of nodes per level, child
    parameters the number of children drawn for each parent. Both are
    sampled from normal distributions and floored at zero.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    depth: int = Field(5, ge=1, description="Number of levels below the root.")
    width_mean: float = Field(
        10.0, ge=0, allow_inf_nan=False, description="Target nodes per level, mean."
    )
    width_std: float = Field(
        0.5, ge=0, allow_inf_nan=False, description="Target nodes per level, std. dev."
    )
    child_mean: float = Field(
        3.0, ge=0, allow_inf_nan=False, description="Children per node, mean."
    )
    child_dev: float = Field(
        1.0, ge=0, allow_inf_nan=False, description="Children per node, std. dev."
    )
    seed: int | None = Field(
        default=None,
        ge=0,
        lt=MAX_SEED,
        description="64-bit RNG seed; derived from OS entropy when omitted.",
    )
    name: str | None = Field(
        default=None,
        description="Display label of the root and title of the graph.",
    )

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if not value.strip():
            raise ValueError("name must not be blank")
        if not value.isprintable():
            raise ValueError("name must not contain line breaks or control characters")
        return value


def build_config(**params: Any) -> GenerationConfig:
    """
    Validate raw parameters into a GenerationConfig.

    Parameters set to None fall back to their defaults, except ``seed`` and
    ``name`` for which None is meaningful. Any validation failure is reported
    as InvalidConfiguration naming the first offending parameter.
    """
    cleaned = {
        key: value
        for key, value in params.items()
        if value is not None or key in ("seed", "name")
    }
    try:
        return GenerationConfig(**cleaned)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = first.get("loc") or ("<config>",)
        raise InvalidConfiguration(str(loc[0]), first.get("msg", "invalid value")) from None


# ─────────────────────────────────────────────────────────────
# Section configs
# ─────────────────────────────────────────────────────────────


class LoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "WARNING"
    format: str = "%(asctime)-20s %(name)-28s %(levelname)-8s: %(message)s"


class OutputSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    format: OutputFormat = Field(
        OutputFormat.MERMAID, description="Grammar emitted when --format is not given."
    )


# ─────────────────────────────────────────────────────────────
# Top-level settings
# ─────────────────────────────────────────────────────────────


class AppSettings(BaseSettings):
    """
    Application configuration for the treegen command.

    Precedence (highest → lowest):

    1. Init kwargs (tests/overrides)
    2. Environment variables
    3. .env and .env.local
    4. Defaults in this class

    Command-line flags override whatever is resolved here.
    """

    model_config = SettingsConfigDict(
        env_prefix="TREEGEN_",  # TREEGEN_LOGGING__LEVEL, TREEGEN_GENERATION__DEPTH, ...
        env_file=(".env", ".env.local"),  # .env.local overrides .env
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    logging: LoggingSettings = LoggingSettings()
    output: OutputSettings = OutputSettings()  # type: ignore[call-arg]
    generation: GenerationConfig = GenerationConfig()  # type: ignore[call-arg]


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AppSettings:
    """
    Cached accessor for process-wide settings.

    `overrides` are init kwargs → highest precedence (handy in tests).
    """
    return AppSettings(**overrides)


def load_settings(**overrides: Any) -> AppSettings:
    """
    Resolve settings, reporting bad environment values as treegen errors.

    An unknown ``output.format`` raises UnsupportedFormat; any other invalid
    value raises InvalidConfiguration naming the setting (generation
    parameters are named as on the command line, e.g. ``depth``).
    """
    try:
        return get_settings(**overrides)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = tuple(str(part) for part in first.get("loc", ()))
        if loc[:2] == ("output", "format"):
            raise UnsupportedFormat(str(first.get("input")), [f.value for f in OutputFormat]) from None
        if len(loc) > 1 and loc[0] == "generation":
            parameter = loc[1]
        else:
            parameter = ".".join(loc) or "<settings>"
        raise InvalidConfiguration(parameter, first.get("msg", "invalid value")) from None
