import json
import os
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import DEFAULT_FORMAT, format_key
from .formats.registry import Codec

CONTENT_NEGOTIATION_ENV_VAR_PREFIX = "CONTENT_NEGOTIATION_"

# Fields that may be set from the environment, and whether the value is JSON
_ENV_FIELDS = {
    "default_format": False,
    "content_types": True,
}


class FormatterConfig(BaseModel):
    """Process-wide Formatter configuration, built once at setup."""

    model_config = ConfigDict(extra="ignore")

    content_types: Dict[str, str] = Field(
        default_factory=dict,
        description="Additions/overrides of format key -> content type",
    )
    formatters: Dict[str, Any] = Field(
        default_factory=dict,
        description="Additions/overrides of format key -> Codec (or encoder callable)",
    )
    default_format: str = Field(
        default=DEFAULT_FORMAT,
        description="Format used when no signal in the request selects one",
    )

    @classmethod
    def from_env(cls) -> "FormatterConfig":
        """Create FormatterConfig from environment variables.

        Returns:
            FormatterConfig instance with values loaded from CONTENT_NEGOTIATION_* env vars
        """
        return cls()

    @model_validator(mode="before")
    @classmethod
    def load_from_env_vars(cls, data: Any) -> Dict[str, Any]:
        """Load configuration from environment variables.

        Reads CONTENT_NEGOTIATION_DEFAULT_FORMAT and CONTENT_NEGOTIATION_CONTENT_TYPES
        (a JSON object). Provided data takes precedence over environment variables.
        """
        env_config = {}
        for name, is_json in _ENV_FIELDS.items():
            raw = os.environ.get(f"{CONTENT_NEGOTIATION_ENV_VAR_PREFIX}{name.upper()}")
            if raw:
                env_config[name] = json.loads(raw) if is_json else raw

        if isinstance(data, dict):
            return {**env_config, **data}
        return env_config

    @field_validator("content_types", mode="before")
    @classmethod
    def normalize_content_type_keys(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {format_key(key): content_type for key, content_type in value.items()}
        return value

    @field_validator("formatters", mode="before")
    @classmethod
    def normalize_formatters(cls, value: Any) -> Any:
        """Wrap bare encoder callables as encoder-only codecs."""
        if not isinstance(value, dict):
            return value
        formatters = {}
        for key, codec in value.items():
            if not isinstance(codec, Codec):
                if not callable(codec):
                    raise ValueError(
                        f"Formatter for {format_key(key)!r} must be a Codec or a callable, "
                        f"not {type(codec).__name__}"
                    )
                codec = Codec(encode=codec)
            formatters[format_key(key)] = codec
        return formatters

    @field_validator("default_format", mode="before")
    @classmethod
    def normalize_default_format(cls, value: Any) -> Any:
        return format_key(value) if value else value


def merge_config(config: FormatterConfig, overrides: Dict[str, Any]) -> FormatterConfig:
    """Layer keyword overrides on top of an existing FormatterConfig.

    ``content_types`` and ``formatters`` are merged key by key with the
    overrides winning; ``default_format`` is replaced when given. Other keys
    are ignored, as with FormatterConfig itself.
    """
    override_config = FormatterConfig.model_validate(
        {
            key: value
            for key, value in overrides.items()
            if key in FormatterConfig.model_fields
        }
    )
    merged = {
        "content_types": dict(config.content_types),
        "formatters": dict(config.formatters),
        "default_format": config.default_format,
    }
    # Only keys actually passed count; the env overlay already lives in config
    for key in ("content_types", "formatters"):
        if key in overrides:
            merged[key].update(getattr(override_config, key))
    if "default_format" in overrides:
        merged["default_format"] = override_config.default_format
    return FormatterConfig(**merged)
