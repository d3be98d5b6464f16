"""Generator configuration loading and precedence resolution.

This module turns JSON configuration files into a
:class:`~lightning_mcp.models.GeneratorConfig`:

* **Config files** -- :func:`load_config` reads and validates one file.
  Every field has a default, so a file only needs the keys it overrides.
  Keys may use the camelCase spelling (``devDependencies``, ``mcpSdk``) or
  the snake_case field names.
* **Precedence resolution** -- :func:`resolve_config` picks the config file
  from the CLI flag, the ``LIGHTNING_MCP_CONFIG`` environment variable, or
  ``./lightning-mcp.json``, in that order, falling back to defaults.
* **Project versions** -- :func:`project_dependency_versions` reads the
  ``@modelcontextprotocol/sdk`` and ``axios`` versions pinned by the current
  directory's ``package.json``; they override the configured versions.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from lightning_mcp.exceptions import ConfigError
from lightning_mcp.models import GeneratorConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LIGHTNING_MCP_CONFIG"
_PROJECT_CONFIG_FILENAME = "lightning-mcp.json"
_PACKAGE_JSON = "package.json"

_PROJECT_PACKAGES = {
    "@modelcontextprotocol/sdk": "mcp_sdk",
    "axios": "axios",
}


def load_config(path: str | Path) -> GeneratorConfig:
    """Load and validate a generator configuration file.

    Args:
        path: Path to a JSON config file.

    Returns:
        The deserialised :class:`~lightning_mcp.models.GeneratorConfig`.

    Raises:
        ConfigError: If the file does not exist, contains invalid JSON, or
            fails Pydantic validation.
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigError(f"Config file not found at {config_path}")
    try:
        text = config_path.read_text(encoding="utf-8")
        data = json.loads(text)
        return GeneratorConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {config_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read config at {config_path}: {exc}") from exc


def project_dependency_versions(directory: Optional[Path] = None) -> dict[str, str]:
    """Return dependency versions pinned by ``package.json`` in *directory*.

    Only the MCP SDK and axios are looked up. The result is keyed by
    :class:`~lightning_mcp.models.DependencyVersions` field name. A missing
    or unreadable ``package.json`` yields an empty dict.
    """
    path = (directory or Path.cwd()) / _PACKAGE_JSON
    if not path.is_file():
        return {}

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Could not read %s, using configured versions: %s", path, exc)
        return {}

    deps = data.get("dependencies") if isinstance(data, dict) else None
    if not isinstance(deps, dict):
        return {}

    return {
        field: deps[package]
        for package, field in _PROJECT_PACKAGES.items()
        if isinstance(deps.get(package), str) and deps[package]
    }


def resolve_config(cli_path: Optional[str] = None) -> GeneratorConfig:
    """Resolve the effective generator configuration.

    Precedence (high to low):
        1. CLI flag (``cli_path``)
        2. Environment variable (``LIGHTNING_MCP_CONFIG``)
        3. Project config (``./lightning-mcp.json``)
        4. Defaults

    Versions pinned by ``./package.json`` are applied on top of the result.

    Raises:
        ConfigError: If the selected config file is missing or invalid.
    """
    config_path: Optional[Path] = None
    env_path = os.environ.get(CONFIG_ENV_VAR)
    project_path = Path.cwd() / _PROJECT_CONFIG_FILENAME

    if cli_path is not None:
        config_path = Path(cli_path)
    elif env_path:
        config_path = Path(env_path)
    elif project_path.is_file():
        config_path = project_path

    if config_path is not None:
        logger.debug("Using config file %s", config_path)
        config = load_config(config_path)
    else:
        config = GeneratorConfig()

    overrides = project_dependency_versions()
    if overrides:
        logger.debug("Using dependency versions from package.json: %s", overrides)
        dependencies = config.dependencies.model_copy(update=overrides)
        config = config.model_copy(update={"dependencies": dependencies})

    return config
