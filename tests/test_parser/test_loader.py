"""Tests for lightning_mcp.parser.loader."""

from __future__ import annotations

import io
import json
import textwrap
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from lightning_mcp.exceptions import DocumentLoadError
from lightning_mcp.parser.loader import (
    _load_from_file,
    _load_from_stdin,
    _load_from_url,
    _parse_content,
    load_document,
)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


# ---------------------------------------------------------------------------
# load_document dispatch
# ---------------------------------------------------------------------------


class TestLoadDocument:
    """Test load_document routes to the correct loader."""

    def test_loads_from_file_json(self) -> None:
        result = load_document(str(FIXTURES_DIR / "petstore.json"))
        assert result["openapi"] == "3.0.3"
        assert result["info"]["title"] == "Petstore API"

    def test_loads_from_file_yaml(self, tmp_path: Path) -> None:
        yaml_content = textwrap.dedent("""\
            openapi: "3.0.3"
            info:
              title: YAML Test
              version: "1.0.0"
            paths: {}
        """)
        yaml_file = tmp_path / "openapi.yaml"
        yaml_file.write_text(yaml_content, encoding="utf-8")
        result = load_document(str(yaml_file))
        assert result["info"]["title"] == "YAML Test"

    def test_loads_from_stdin(self) -> None:
        doc = json.dumps({"openapi": "3.0.3", "info": {"title": "stdin test", "version": "1.0"}})
        with patch("lightning_mcp.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO(doc)
            result = load_document("-")
        assert result["info"]["title"] == "stdin test"

    def test_loads_from_url(self) -> None:
        doc = {"openapi": "3.0.3", "info": {"title": "URL test", "version": "1.0"}}
        mock_response = httpx.Response(
            status_code=200,
            json=doc,
            request=httpx.Request("GET", "https://example.com/openapi.json"),
        )
        with patch("lightning_mcp.parser.loader.httpx.get", return_value=mock_response) as mock_get:
            result = load_document("https://example.com/openapi.json")
        assert result["info"]["title"] == "URL test"
        assert mock_get.call_args.kwargs["timeout"] == 30.0
        assert mock_get.call_args.kwargs["follow_redirects"] is True


# ---------------------------------------------------------------------------
# _load_from_file
# ---------------------------------------------------------------------------


class TestLoadFromFile:
    """Test loading documents from local files."""

    def test_file_not_found_raises(self) -> None:
        with pytest.raises(DocumentLoadError, match="not found"):
            _load_from_file("/nonexistent/path/to/openapi.json")

    def test_empty_file_raises(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.json"
        empty.write_text("", encoding="utf-8")
        with pytest.raises(DocumentLoadError, match="empty"):
            _load_from_file(str(empty))

    def test_invalid_json_file_raises(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("{invalid json", encoding="utf-8")
        with pytest.raises(DocumentLoadError, match="Invalid JSON"):
            _load_from_file(str(bad))

    def test_unknown_extension_detects_yaml(self, tmp_path: Path) -> None:
        doc = tmp_path / "openapi.txt"
        doc.write_text("openapi: 3.0.0\ninfo:\n  title: T\n  version: '1'\n", encoding="utf-8")
        result = _load_from_file(str(doc))
        assert result["info"]["title"] == "T"

    def test_non_object_json_raises(self, tmp_path: Path) -> None:
        array_file = tmp_path / "array.json"
        array_file.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(DocumentLoadError, match="must be a JSON/YAML object"):
            _load_from_file(str(array_file))


# ---------------------------------------------------------------------------
# _load_from_stdin
# ---------------------------------------------------------------------------


class TestLoadFromStdin:
    """Test loading documents from stdin."""

    def test_reads_yaml_from_stdin(self) -> None:
        yaml_content = textwrap.dedent("""\
            openapi: "3.0.0"
            info:
              title: YAML stdin
              version: "1.0"
        """)
        with patch("lightning_mcp.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO(yaml_content)
            result = _load_from_stdin()
        assert result["info"]["title"] == "YAML stdin"

    def test_whitespace_only_stdin_raises(self) -> None:
        with patch("lightning_mcp.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("   \n\t\n  ")
            with pytest.raises(DocumentLoadError, match="No input"):
                _load_from_stdin()


# ---------------------------------------------------------------------------
# _load_from_url
# ---------------------------------------------------------------------------


class TestLoadFromUrl:
    """Test loading documents from URLs."""

    def test_loads_yaml_from_url(self) -> None:
        yaml_body = textwrap.dedent("""\
            openapi: "3.0.0"
            info:
              title: YAML Remote
              version: "1.0"
        """)
        mock_response = httpx.Response(
            status_code=200,
            text=yaml_body,
            headers={"content-type": "application/x-yaml"},
            request=httpx.Request("GET", "https://example.com/openapi.yaml"),
        )
        with patch("lightning_mcp.parser.loader.httpx.get", return_value=mock_response):
            result = _load_from_url("https://example.com/openapi.yaml")
        assert result["info"]["title"] == "YAML Remote"

    def test_http_error_raises(self) -> None:
        mock_response = httpx.Response(
            status_code=404,
            request=httpx.Request("GET", "https://example.com/missing.json"),
        )
        with patch("lightning_mcp.parser.loader.httpx.get", return_value=mock_response):
            with pytest.raises(DocumentLoadError, match="HTTP 404"):
                _load_from_url("https://example.com/missing.json")

    def test_connection_error_raises(self) -> None:
        with patch(
            "lightning_mcp.parser.loader.httpx.get",
            side_effect=httpx.ConnectError("Connection refused"),
        ):
            with pytest.raises(DocumentLoadError, match="Failed to fetch"):
                _load_from_url("https://unreachable.example.com/openapi.json")


# ---------------------------------------------------------------------------
# _parse_content
# ---------------------------------------------------------------------------


class TestParseContent:
    """Test content parsing with format detection."""

    def test_parses_json(self) -> None:
        assert _parse_content('{"key": "value"}') == {"key": "value"}

    def test_parses_yaml(self) -> None:
        result = _parse_content("key: value\nnested:\n  a: 1")
        assert result == {"key": "value", "nested": {"a": 1}}

    def test_json_hint_forces_json_only(self) -> None:
        with pytest.raises(DocumentLoadError, match="Invalid JSON"):
            _parse_content("key: value", hint="json")

    def test_invalid_content_raises(self) -> None:
        with pytest.raises(DocumentLoadError, match="Failed to parse"):
            _parse_content("}{not valid at all][", hint="")

    def test_non_dict_content_raises(self) -> None:
        with pytest.raises(DocumentLoadError, match="must be a JSON/YAML object"):
            _parse_content('"just a string"')

    def test_null_yaml_raises(self) -> None:
        with pytest.raises(DocumentLoadError, match="empty document"):
            _parse_content("---\n", hint="yaml")

    def test_error_is_document_error_exit_code(self) -> None:
        with pytest.raises(DocumentLoadError) as exc_info:
            _parse_content("[]")
        assert exc_info.value.exit_code == 7
