"""Locate named JSON resources in an override directory or inside a package."""

from __future__ import annotations

import importlib.resources
from importlib.resources.abc import Traversable
import os
from pathlib import Path

RESOURCE_DIR_ENV = "JSONKIT_RESOURCE_DIR"


def _dedupe(candidates: list[Traversable]) -> list[Traversable]:
    seen: set[str] = set()
    out: list[Traversable] = []
    for candidate in candidates:
        key = str(candidate)
        if key in seen:
            continue
        out.append(candidate)
        seen.add(key)
    return out


def resource_candidates(name: str, package: str) -> list[Traversable]:
    relative = name.lstrip("/")
    candidates: list[Traversable] = []

    env_val = os.environ.get(RESOURCE_DIR_ENV)
    if env_val:
        candidates.append(Path(env_val).expanduser() / relative)

    try:
        root = importlib.resources.files(package)
    except ModuleNotFoundError:
        root = None
    if root is not None:
        candidates.append(root.joinpath(*relative.split("/")))
    return _dedupe(candidates)


def find_resource(name: str, package: str) -> Traversable:
    for candidate in resource_candidates(name, package):
        if candidate.is_file():
            return candidate
    searched = ", ".join(str(path) for path in resource_candidates(name, package)) or "<nothing>"
    raise FileNotFoundError(f"Could not find resource '{name}'. Searched: {searched}")
