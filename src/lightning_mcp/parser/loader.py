"""Load API description documents from a URL, local file, or stdin.

This module handles all I/O for fetching raw description documents and turning
them into Python dictionaries. JSON and YAML are both accepted, with the
format guessed from the file extension or the response ``Content-Type`` and
confirmed by trying JSON first.

The single public function is :func:`load_document`. Its result is handed to
:func:`~lightning_mcp.parser.resolver.resolve_component_refs` and then to
:func:`~lightning_mcp.parser.normalizer.normalize`; this module does not look
at the document's structure.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from lightning_mcp.exceptions import DocumentLoadError

_FETCH_TIMEOUT = 30.0


def load_document(source: str) -> dict[str, Any]:
    """Load a description document from URL, file path, or stdin (``-``).

    Args:
        source: An ``http(s)`` URL, a file path, or ``-`` for stdin.

    Returns:
        The parsed document as a dictionary.

    Raises:
        DocumentLoadError: If the source cannot be read or parsed, or does
            not contain a mapping at the top level.
    """
    if source == "-":
        return _load_from_stdin()
    if source.startswith(("http://", "https://")):
        return _load_from_url(source)
    return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    """Read the whole of stdin and parse it."""
    try:
        content = sys.stdin.read()
    except (OSError, ValueError) as exc:
        raise DocumentLoadError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise DocumentLoadError("No input received from stdin")

    return _parse_content(content, hint="")


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a document over HTTP(S).

    Raises:
        DocumentLoadError: On HTTP error status, network failure, or
            unparseable content.
    """
    try:
        response = httpx.get(url, timeout=_FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise DocumentLoadError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise DocumentLoadError(f"Failed to fetch document from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a document from a local ``.json``, ``.yaml`` or ``.yml`` file.

    Unknown extensions fall back to content-based detection.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise DocumentLoadError(f"Description document not found at {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentLoadError(f"Failed to read {path}: {exc}") from exc

    if not content.strip():
        raise DocumentLoadError(f"Description document is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as JSON or YAML.

    JSON is tried first unless *hint* is ``"yaml"``; a ``"json"`` hint
    disables the YAML fallback.

    Raises:
        DocumentLoadError: If neither parser accepts the content, or the
            top-level value is not a mapping.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            return _require_mapping(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise DocumentLoadError(f"Invalid JSON: {exc}") from exc
            json_error = exc

    try:
        return _require_mapping(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        msg = "Failed to parse description document as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise DocumentLoadError(msg) from exc


def _require_mapping(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        kind = type(value).__name__ if value is not None else "empty document"
        raise DocumentLoadError(
            f"Description document must be a JSON/YAML object (got {kind})"
        )
    return value
