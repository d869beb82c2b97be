"""Runtime configuration loading."""

from __future__ import annotations

from pathlib import Path
import yaml
from pydantic import BaseModel, Field, model_validator

from jsonkit.io.printing import DROPPING_NULLS, SPACES4, Printer


class HttpConfig(BaseModel):
    timeout_s: float = Field(default=30.0, gt=0)
    headers: dict[str, str] = Field(default_factory=lambda: {"Accept": "application/json"})


class ParseConfig(BaseModel):
    excerpt_chars: int = Field(default=200, ge=16)


class JsonKitConfig(BaseModel):
    printer: Printer = DROPPING_NULLS
    write_printer: Printer = SPACES4.model_copy(update={"trailing_newline": True})
    http: HttpConfig = Field(default_factory=HttpConfig)
    parse: ParseConfig = Field(default_factory=ParseConfig)
    resource_package: str = "jsonkit.resources"

    @model_validator(mode="after")
    def validate_resource_package(self) -> "JsonKitConfig":
        self.resource_package = self.resource_package.strip()
        if not self.resource_package:
            raise ValueError("resource_package must name an importable package.")
        return self


def load_config(config_path: Path) -> JsonKitConfig:
    """Load and validate YAML config."""
    raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    return JsonKitConfig.model_validate(raw)
