"""Tests for openrpc_model.parser.loader."""

from __future__ import annotations

import io
import json
import textwrap
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from openrpc_model.exceptions import (
    ConnectionError_,
    DocumentNotFoundError,
    MalformedInputError,
    SourceError,
    TypeMismatchError,
)
from openrpc_model.exit_codes import EXIT_CONNECTION_ERROR, EXIT_NOT_FOUND
from openrpc_model.parser.loader import (
    _decode_content,
    _read_file,
    _read_stdin,
    _read_url,
    is_supported_version,
    load_document,
)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

MINIMAL = {"openrpc": "1.2.6", "info": {"title": "T", "version": "1"}, "methods": []}


# ---------------------------------------------------------------------------
# load_document dispatch
# ---------------------------------------------------------------------------


class TestLoadDocument:
    """Test load_document routes to the correct reader."""

    def test_loads_from_file_json(self) -> None:
        doc = load_document(str(FIXTURES_DIR / "petstore.json"))
        assert doc.openrpc == "1.2.6"
        assert doc.info.title == "Petstore Expanded"

    def test_loads_from_file_yaml(self, tmp_path: Path) -> None:
        yaml_content = textwrap.dedent("""\
            openrpc: "1.2.6"
            info:
              title: YAML Test
              version: "1.0.0"
            methods:
              - name: ping
                params: []
        """)
        yaml_file = tmp_path / "openrpc.yaml"
        yaml_file.write_text(yaml_content, encoding="utf-8")
        doc = load_document(str(yaml_file))
        assert doc.info.title == "YAML Test"
        assert doc.methods[0].name == "ping"

    def test_loads_from_yml_extension(self, tmp_path: Path) -> None:
        yml_file = tmp_path / "openrpc.yml"
        yml_file.write_text(
            'openrpc: "1.0.0"\ninfo: {title: Y, version: "2"}\nmethods: []\n',
            encoding="utf-8",
        )
        assert load_document(str(yml_file)).openrpc == "1.0.0"

    def test_loads_from_stdin(self) -> None:
        with patch("openrpc_model.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO(json.dumps(MINIMAL))
            doc = load_document("-")
        assert doc.info.title == "T"

    def test_loads_from_url(self) -> None:
        mock_response = httpx.Response(
            status_code=200,
            json=MINIMAL,
            request=httpx.Request("GET", "https://example.com/openrpc.json"),
        )
        with patch("openrpc_model.parser.loader.httpx.get", return_value=mock_response):
            doc = load_document("https://example.com/openrpc.json")
        assert doc.info.title == "T"

    def test_missing_file_is_not_found(self) -> None:
        with pytest.raises(DocumentNotFoundError) as exc_info:
            load_document("/nonexistent/path/openrpc.json")
        assert exc_info.value.exit_code == EXIT_NOT_FOUND

    def test_invalid_document_propagates(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text('{"openrpc": "1.2.6", "info": "T", "methods": []}', encoding="utf-8")
        with pytest.raises(TypeMismatchError):
            load_document(str(bad))


# ---------------------------------------------------------------------------
# _read_file
# ---------------------------------------------------------------------------


class TestReadFile:
    """Test reading documents from local files."""

    def test_json_has_no_hint(self) -> None:
        content, hint = _read_file(str(FIXTURES_DIR / "minimal.json"))
        assert json.loads(content)["openrpc"] == "1.2.6"
        assert hint == ""

    def test_yaml_suffix_sets_hint(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "doc.YAML"
        yaml_file.write_text("openrpc: '1.2.6'\n", encoding="utf-8")
        _, hint = _read_file(str(yaml_file))
        assert hint == "yaml"

    def test_file_not_found_raises(self) -> None:
        with pytest.raises(DocumentNotFoundError, match="not found"):
            _read_file("/nonexistent/path/to/openrpc.json")

    def test_directory_is_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentNotFoundError):
            _read_file(str(tmp_path))

    def test_empty_file_raises(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.json"
        empty.write_text("", encoding="utf-8")
        with pytest.raises(SourceError, match="empty"):
            _read_file(str(empty))


# ---------------------------------------------------------------------------
# _read_stdin
# ---------------------------------------------------------------------------


class TestReadStdin:
    """Test reading documents from stdin."""

    def test_reads_text(self) -> None:
        with patch("openrpc_model.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO('{"a": 1}')
            assert _read_stdin() == '{"a": 1}'

    def test_empty_stdin_raises(self) -> None:
        with patch("openrpc_model.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("")
            with pytest.raises(SourceError, match="No input"):
                _read_stdin()

    def test_whitespace_only_stdin_raises(self) -> None:
        with patch("openrpc_model.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("   \n\t\n  ")
            with pytest.raises(SourceError, match="No input"):
                _read_stdin()


# ---------------------------------------------------------------------------
# _read_url
# ---------------------------------------------------------------------------


class TestReadUrl:
    """Test fetching documents over HTTP."""

    def test_json_body(self) -> None:
        mock_response = httpx.Response(
            status_code=200,
            json=MINIMAL,
            request=httpx.Request("GET", "https://example.com/openrpc.json"),
        )
        with patch("openrpc_model.parser.loader.httpx.get", return_value=mock_response):
            content, hint = _read_url("https://example.com/openrpc.json")
        assert json.loads(content) == MINIMAL
        assert hint == ""

    def test_yaml_content_type_sets_hint(self) -> None:
        mock_response = httpx.Response(
            status_code=200,
            text="openrpc: '1.2.6'\n",
            headers={"content-type": "application/x-yaml"},
            request=httpx.Request("GET", "https://example.com/openrpc.yaml"),
        )
        with patch("openrpc_model.parser.loader.httpx.get", return_value=mock_response):
            _, hint = _read_url("https://example.com/openrpc.yaml")
        assert hint == "yaml"

    def test_http_error_raises(self) -> None:
        mock_response = httpx.Response(
            status_code=404,
            request=httpx.Request("GET", "https://example.com/missing.json"),
        )
        with patch("openrpc_model.parser.loader.httpx.get", return_value=mock_response):
            with pytest.raises(ConnectionError_, match="HTTP 404") as exc_info:
                _read_url("https://example.com/missing.json")
        assert exc_info.value.exit_code == EXIT_CONNECTION_ERROR

    def test_connection_error_raises(self) -> None:
        with patch(
            "openrpc_model.parser.loader.httpx.get",
            side_effect=httpx.ConnectError("Connection refused"),
        ):
            with pytest.raises(ConnectionError_, match="Failed to fetch"):
                _read_url("https://unreachable.example.com/openrpc.json")


# ---------------------------------------------------------------------------
# _decode_content
# ---------------------------------------------------------------------------


class TestDecodeContent:
    """Test format selection before decoding."""

    def test_json_without_hint(self) -> None:
        assert _decode_content(json.dumps(MINIMAL)).info.title == "T"

    def test_yaml_without_hint_is_malformed_json(self) -> None:
        with pytest.raises(MalformedInputError, match="Invalid JSON"):
            _decode_content("openrpc: '1.2.6'\n")

    def test_invalid_yaml_raises(self) -> None:
        with pytest.raises(MalformedInputError, match="Invalid YAML"):
            _decode_content("key: [unclosed", hint="yaml")

    def test_unquoted_yaml_version_is_type_mismatch(self) -> None:
        content = "openrpc: 1.2\ninfo: {title: T, version: '1'}\nmethods: []\n"
        with pytest.raises(TypeMismatchError) as exc_info:
            _decode_content(content, hint="yaml")
        assert exc_info.value.field == "openrpc"
        assert exc_info.value.actual == "number"

    def test_deep_yaml_nesting_is_malformed(self) -> None:
        with patch(
            "openrpc_model.parser.loader.yaml.safe_load",
            side_effect=RecursionError("maximum recursion depth exceeded"),
        ):
            with pytest.raises(MalformedInputError, match="nesting too deep"):
                _decode_content("openrpc: '1.2.6'\n", hint="yaml")

    def test_null_yaml_is_type_mismatch(self) -> None:
        with pytest.raises(TypeMismatchError) as exc_info:
            _decode_content("---\n", hint="yaml")
        assert exc_info.value.actual == "null"


# ---------------------------------------------------------------------------
# is_supported_version
# ---------------------------------------------------------------------------


class TestIsSupportedVersion:
    """Test OpenRPC version checks."""

    @pytest.mark.parametrize("version", ["1.0.0", "1.2.6", "1.3.2", "1.0.0-rc1", "1.4"])
    def test_accepts_1x(self, version: str) -> None:
        assert is_supported_version(version) is True

    @pytest.mark.parametrize("version", ["2.0.0", "0.9.0", "1", "", "one.two"])
    def test_rejects_others(self, version: str) -> None:
        assert is_supported_version(version) is False
