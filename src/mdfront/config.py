"""Preprocessor configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDFRONT_"


class Settings(BaseModel):
    delimiter:     str       = Field(default="+++", min_length=1, description="Literal text bounding the frontmatter block")
    table_class:   str       = Field(default="preamble", description="CSS class of the rendered table")
    link_keys:     list[str] = Field(default_factory=lambda: ["author"], description="Keys whose values get linkified")
    escape_html:   bool      = Field(default=False, description="HTML-escape keys and values before rendering")
    parser_config: str       = Field(default="commonmark", pattern="^(commonmark|zero)$", description="MarkdownIt preset name")
    renderers:     list[str] = Field(default_factory=lambda: ["html"], description="Renderers reported as supported")
    log_level:     str       = Field(default="WARNING", pattern="(?i)^(debug|info|warning|error|critical)$", description="Logging level for stderr output")


def _env_value(name: str, raw: str) -> Any:
    """Split comma-separated env values for list fields; pydantic coerces the rest."""
    annotation = Settings.model_fields[name].annotation
    if getattr(annotation, "__origin__", None) is list:
        return [part.strip() for part in raw.split(",") if part.strip()]
    return raw


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDFRONT_<FIELD> env vars, then non-None overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = _env_value(name, val)

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None and k in Settings.model_fields})
    return Settings(**data)
