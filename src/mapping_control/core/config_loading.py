"""Load declarative mapping files for the CLI and the model adapters.

The loader supports JSON and YAML documents with strict root-type validation.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

SUPPORTED_CONFIG_SUFFIXES: tuple[str, ...] = (".json", ".yaml", ".yml")


def load_config_mapping(path: str | Path) -> dict[str, Any]:
    """Load one JSON/YAML file whose root is an object mapping.

    Parameters
    ----------
    path : str | pathlib.Path
        File path. Supported suffixes are `.json`, `.yaml`, and `.yml`.

    Returns
    -------
    dict[str, Any]
        Parsed mapping.

    Raises
    ------
    ValueError
        If suffix is unsupported or the document root is not an object mapping.
    """

    config_path = Path(path)
    suffix = config_path.suffix.lower()

    if suffix == ".json":
        with config_path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
    elif suffix in {".yaml", ".yml"}:
        with config_path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    else:
        supported = ", ".join(SUPPORTED_CONFIG_SUFFIXES)
        raise ValueError(
            f"unsupported config file extension {suffix!r}; expected one of {supported}"
        )

    return require_mapping_root(raw)


def parse_json_mapping(text: str | bytes) -> dict[str, Any]:
    """Parse one JSON document whose root is an object mapping."""

    return require_mapping_root(json.loads(text))


def require_mapping_root(raw: Any) -> dict[str, Any]:
    """Return ``raw`` if it is a mapping document root."""

    if not isinstance(raw, dict):
        raise ValueError("config root must be a JSON/YAML object")
    return raw


__all__ = [
    "SUPPORTED_CONFIG_SUFFIXES",
    "load_config_mapping",
    "parse_json_mapping",
    "require_mapping_root",
]
