from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from jsonkit.config import JsonKitConfig, load_config
from jsonkit.io.json_io import load_from_file
from jsonkit.errors import ParseFailure
from tests.helpers import write_text


def test_defaults() -> None:
    config = JsonKitConfig()

    assert config.printer.indent == 2
    assert config.printer.drop_nulls is True
    assert config.write_printer.indent == 4
    assert config.write_printer.drop_nulls is False
    assert config.http.timeout_s == 30.0
    assert config.parse.excerpt_chars == 200
    assert config.resource_package == "jsonkit.resources"


def test_load_config_from_yaml(tmp_path: Path) -> None:
    path = write_text(
        tmp_path / "jsonkit.yaml",
        "printer:\n  indent: 4\n  sort_keys: true\nhttp:\n  timeout_s: 5\nparse:\n  excerpt_chars: 32\n",
    )

    config = load_config(path)

    assert config.printer.indent == 4
    assert config.printer.sort_keys is True
    assert config.http.timeout_s == 5
    assert config.parse.excerpt_chars == 32


def test_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    path = write_text(tmp_path / "empty.yaml", "")

    assert load_config(path) == JsonKitConfig()


def test_invalid_values_are_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValidationError, match="resource_package must name an importable package"):
        JsonKitConfig(resource_package="   ")
    with pytest.raises(ValidationError):
        load_config(write_text(tmp_path / "bad.yaml", "http:\n  timeout_s: 0\n"))


def test_excerpt_length_follows_config(tmp_path: Path) -> None:
    path = write_text(tmp_path / "broken.json", "[" + "7," * 400)
    config = JsonKitConfig.model_validate({"parse": {"excerpt_chars": 20}})

    with pytest.raises(ParseFailure) as caught:
        load_from_file(path, config=config)

    assert caught.value.fragment.startswith("[7,7,7,7,7,7,7,7,7,7")
    assert len(caught.value.fragment) < 60
