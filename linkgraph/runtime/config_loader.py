"""Helpers for loading workspace configuration from TOML/JSON sources.

This module provides a single entry point `load_workspace_config`
that accepts various configuration sources:

* None -> default WorkspaceConfig
* dict -> validated WorkspaceConfig
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from linkgraph.config import WorkspaceConfig
from linkgraph.errors import ConfigurationError

logger = logging.getLogger("linkgraph.runtime.config_loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]

CONFIG_FILE_NAME = ".linkgraph.toml"


def find_config_file(root: Union[str, Path]) -> Optional[Path]:
    """Return ``<root>/.linkgraph.toml`` when it exists."""
    candidate = Path(root) / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None


def _is_existing_file(path: Path) -> bool:
    try:
        return path.is_file()
    except (OSError, ValueError):
        # Inline configuration text is not a valid file name.
        return False


def _from_mapping(data: Dict[str, Any]) -> WorkspaceConfig:
    # Allow the settings to live under a [linkgraph] table.
    section = data.get("linkgraph", data)
    if not isinstance(section, dict):
        raise ConfigurationError("The [linkgraph] section must be a mapping/dict")
    try:
        return WorkspaceConfig.model_validate(section)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid workspace configuration: {exc}") from exc


def load_workspace_config(source: ConfigSource) -> WorkspaceConfig:
    """Load WorkspaceConfig from various configuration sources.

    Args:
        source: One of:
            * None: returns WorkspaceConfig.default()
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        WorkspaceConfig instance.

    Raises:
        ConfigurationError: If the source cannot be parsed or validated.
    """
    if source is None:
        logger.debug("No config source provided; using default WorkspaceConfig")
        return WorkspaceConfig.default()

    # Already parsed mapping
    if isinstance(source, dict):
        logger.debug("Loading WorkspaceConfig from provided dict")
        return _from_mapping(source)

    # Path or string (file path or inline text)
    if isinstance(source, (str, Path)):
        path = Path(source)
        text: Optional[str] = None
        fmt: Optional[str] = None

        if _is_existing_file(path):
            text = path.read_text(encoding="utf-8")
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                stripped = text.lstrip()
                fmt = "json" if stripped.startswith(("{", "[")) else "toml"
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            stripped = text.lstrip()
            fmt = "json" if stripped.startswith(("{", "[")) else "toml"
            logger.info("Loading configuration from inline %s string", fmt)

        try:
            data = json.loads(text) if fmt == "json" else tomllib.loads(text)
        except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
            raise ConfigurationError(f"Cannot parse {fmt} configuration: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError("Top-level configuration must be a mapping/dict")

        return _from_mapping(data)

    raise TypeError(f"Unsupported config source type: {type(source)!r}")


__all__ = ["CONFIG_FILE_NAME", "find_config_file", "load_workspace_config"]
