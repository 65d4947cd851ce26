"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    site_title:    str = Field(default="Blog",  description="Site name used in page titles and the index heading")
    output_dir:    str = Field(default="dist",  description="Directory for generated HTML, sidecars and assets")
    bullets:       str = Field(default="-+", pattern=r"^[-+*]+$", description="Characters that start an unordered list item")
    asset_workers: int = Field(default=4, ge=1, description="Threads used to copy image assets")
    write_sidecar: bool = Field(default=True,   description="Write <slug>.json metadata next to each page")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDBLOG_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDBLOG_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
