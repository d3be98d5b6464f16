"""Project generator -- emit a TypeScript MCP server from a normalized API.

This sub-package is responsible for the second half of the lightning-mcp
pipeline: taking a :class:`~lightning_mcp.models.ParsedAPI` (produced by the
parser) and writing a runnable server project.

Typical usage::

    from lightning_mcp.generator import generate_project, install_and_build

    project = generate_project(api, "./generated-mcp-server", config)
    install_and_build(project.output_dir)

Sub-modules:

* :mod:`~lightning_mcp.generator.tools` -- Operation to MCP tool conversion,
  tool input schemas, and request routes.
* :mod:`~lightning_mcp.generator.project` -- Jinja2 rendering and atomic
  file writes.
* :mod:`~lightning_mcp.generator.build` -- ``npm install`` / ``npm run
  build`` of the generated project.
"""

from lightning_mcp.generator.build import install_and_build
from lightning_mcp.generator.project import generate_project
from lightning_mcp.generator.tools import build_tools

__all__ = ["build_tools", "generate_project", "install_and_build"]
