"""Write a runnable TypeScript MCP server project for a normalized API.

:func:`generate_project` produces the following files inside the output
directory:

* ``src/index.ts`` -- The stdio MCP server. It lists one tool per operation
  and dispatches each tool call as an HTTP request through axios.
* ``src/types.ts`` -- The rendered declaration list from
  :func:`~lightning_mcp.typegen.declarations.build_declarations`.
* ``package.json`` -- npm manifest with the configured dependency versions
  and scripts.
* ``tsconfig.json`` -- TypeScript compiler options from the configured
  constants.
* ``README.md`` -- A listing of the generated tools.

The generation process:

1. Operations are converted into tool descriptors
   (:mod:`lightning_mcp.generator.tools`).
2. A Jinja2 environment is configured with templates from
   ``generator/templates/``.
3. Templates are rendered with the assembled context and each file is
   written atomically (temp file, then rename).

Installing and compiling the result is a separate step; see
:func:`~lightning_mcp.generator.build.install_and_build`.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader

from lightning_mcp.generator.tools import build_tools, tool_input_schema, tool_route
from lightning_mcp.models import GeneratedProject, GeneratorConfig, MCPTool, ParsedAPI
from lightning_mcp.typegen.declarations import build_declarations
from lightning_mcp.typegen.render import render_declarations

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``generator/templates/``)."""

DEFAULT_BASE_URL = "http://localhost"

_NON_PACKAGE_CHAR = re.compile(r"[^a-z0-9]")


def generate_project(
    api: ParsedAPI,
    output_dir: str | Path,
    config: Optional[GeneratorConfig] = None,
) -> GeneratedProject:
    """Generate a complete MCP server project from a normalized API.

    Directories are created automatically; existing files with the same
    names are replaced.

    Args:
        api: The normalized API.
        output_dir: Directory the project is written to.
        config: Generator configuration; defaults apply when ``None``.

    Returns:
        A :class:`~lightning_mcp.models.GeneratedProject` summarising the
        tools, declarations and files written.

    Example::

        project = generate_project(api, "./generated-mcp-server")
        for tool in project.tools:
            print(tool.name)
    """
    config = config or GeneratorConfig()
    output_path = Path(output_dir)

    tools = build_tools(api)
    declarations = build_declarations(api, config.types)

    env = _create_jinja_env()
    context = _build_context(api, tools, config)

    src_path = output_path / "src"
    files = [
        _render_template(env, "index.ts.j2", src_path / "index.ts", context),
        _render_template(env, "package.json.j2", output_path / "package.json", context),
        _render_template(env, "tsconfig.json.j2", output_path / "tsconfig.json", context),
        _render_template(env, "README.md.j2", output_path / "README.md", context),
    ]

    types_path = src_path / "types.ts"
    atomic_write(types_path, render_declarations(declarations))
    files.append(types_path)

    logger.debug("Wrote %d files to %s", len(files), output_path)

    return GeneratedProject(
        output_dir=output_path,
        package_name=context["package_name"],
        base_url=context["base_url"],
        tools=tools,
        declarations=declarations,
        files=files,
    )


def package_name(title: str) -> str:
    """Derive the npm package name: ``My API`` becomes ``my-api-mcp-server``."""
    return _NON_PACKAGE_CHAR.sub("-", title.lower()) + "-mcp-server"


def base_url(api: ParsedAPI) -> str:
    """Return the first server URL, or ``http://localhost`` when none is declared."""
    if api.servers:
        return api.servers[0].url
    return DEFAULT_BASE_URL


def npm_dependencies(config: GeneratorConfig) -> dict[str, str]:
    """Map the configured runtime versions to npm package names.

    Keys the config does not know about are taken as npm package names.
    """
    deps = config.dependencies
    result = {
        "@modelcontextprotocol/sdk": deps.mcp_sdk,
        "axios": deps.axios,
    }
    for name, version in (deps.model_extra or {}).items():
        result[name] = str(version)
    return result


def npm_dev_dependencies(config: GeneratorConfig) -> dict[str, str]:
    dev = config.dev_dependencies
    result = {
        "@types/node": dev.types_node,
        "tsx": dev.tsx,
        "typescript": dev.typescript,
    }
    for name, version in (dev.model_extra or {}).items():
        result[name] = str(version)
    return result


def _create_jinja_env() -> Environment:
    """Create the Jinja2 environment for the project templates.

    Autoescaping is off since none of the outputs are HTML; string values
    are embedded through the ``tojson`` filter instead. ``tojson`` keeps
    mapping order so tool schemas list parameters as declared.
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.policies["json.dumps_kwargs"] = {"sort_keys": False}
    return env


def _build_context(
    api: ParsedAPI,
    tools: list[MCPTool],
    config: GeneratorConfig,
) -> dict[str, Any]:
    return {
        "api_title": api.info.title,
        "api_version": api.info.version,
        "package_name": package_name(api.info.title),
        "base_url": base_url(api),
        "tools": tools,
        "input_schemas": {tool.name: tool_input_schema(tool) for tool in tools},
        "routes": {tool.name: tool_route(tool) for tool in tools},
        "constants": config.constants,
        "scripts": config.scripts,
        "dependencies": npm_dependencies(config),
        "dev_dependencies": npm_dev_dependencies(config),
    }


def _render_template(
    env: Environment,
    template_name: str,
    output_path: Path,
    context: dict[str, Any],
) -> Path:
    template = env.get_template(template_name)
    atomic_write(output_path, template.render(**context))
    return output_path


def atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* through a temp file in the same directory and a rename.

    The temp file is removed if anything fails before the rename.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise
