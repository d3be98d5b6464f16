"""Built-in CLI sub-commands for lightning-mcp.

This package groups the Typer sub-command modules that form the CLI's
top-level command tree:

* :mod:`~lightning_mcp.commands.generate` -- write (and optionally build) an
  MCP server project from a description document.
* :mod:`~lightning_mcp.commands.types` -- print the TypeScript declarations
  compiled from a description document.
* :mod:`~lightning_mcp.commands.inspect` -- examine the operations, schemas,
  and metadata of a description document.

Single commands export a plain callback registered directly on the root app;
the ``inspect`` group exports a :class:`typer.Typer` sub-application.
"""

from __future__ import annotations

import contextlib
from typing import Iterator, Optional

import typer

from lightning_mcp.exceptions import LightningMCPError
from lightning_mcp.models import GeneratorConfig, ReferenceMode
from lightning_mcp.output import error


@contextlib.contextmanager
def exit_on_error() -> Iterator[None]:
    """Report a :class:`LightningMCPError` on stderr and exit with its code."""
    try:
        yield
    except LightningMCPError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def with_type_options(
    config: GeneratorConfig,
    references: Optional[ReferenceMode] = None,
    dedupe_names: bool = False,
) -> GeneratorConfig:
    """Apply the ``--references`` / ``--dedupe-names`` flags on top of *config*."""
    updates: dict[str, object] = {}
    if references is not None:
        updates["reference_mode"] = references
    if dedupe_names:
        updates["dedupe_names"] = True
    if not updates:
        return config
    return config.model_copy(update={"types": config.types.model_copy(update=updates)})
