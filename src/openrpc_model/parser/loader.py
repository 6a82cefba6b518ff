"""Load OpenRPC documents from a URL, local file, or stdin.

This module handles all I/O for fetching raw documents and hands the text to
the decoder. JSON is the native format; YAML documents are accepted when the
file extension or the HTTP content type says so, and are decoded through
:func:`~openrpc_model.parser.decoder.parse_obj` after ``yaml.safe_load``.

The public functions are:

* :func:`load_document` -- Load and decode a document from any supported
  source.
* :func:`is_supported_version` -- Check whether an ``openrpc`` version string
  belongs to the 1.x line this model targets.
"""

from __future__ import annotations

import sys
from pathlib import Path

import httpx
import yaml

from openrpc_model.exceptions import (
    ConnectionError_,
    DocumentNotFoundError,
    MalformedInputError,
    SourceError,
)
from openrpc_model.models import Document
from openrpc_model.parser.decoder import parse, parse_obj

SUPPORTED_MAJOR_VERSION = "1"


def load_document(source: str) -> Document:
    """Load an OpenRPC document from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The decoded document.

    Raises:
        SourceError: If the source cannot be read.
        DecodeError: If the content is not a valid OpenRPC document.
    """
    if source == "-":
        content, hint = _read_stdin(), ""
    elif source.startswith(("http://", "https://")):
        content, hint = _read_url(source)
    else:
        content, hint = _read_file(source)

    return _decode_content(content, hint=hint)


def _read_stdin() -> str:
    """Read all of stdin.

    Raises:
        SourceError: If stdin cannot be read or is empty.
    """
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise SourceError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SourceError("No input received from stdin")
    return content


def _read_url(url: str) -> tuple[str, str]:
    """Fetch a document over HTTP(S).

    Returns:
        The response body and a format hint derived from its content type.

    Raises:
        ConnectionError_: If the URL cannot be fetched.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise ConnectionError_(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise ConnectionError_(f"Failed to fetch document from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = "yaml" if "yaml" in content_type or "yml" in content_type else ""
    return response.text, hint


def _read_file(path: str) -> tuple[str, str]:
    """Read a local document.

    Returns:
        The file content and a format hint derived from its extension.

    Raises:
        DocumentNotFoundError: If *path* is not a file.
        SourceError: If the file cannot be read or is empty.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise DocumentNotFoundError(f"Document file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(f"Failed to read document file {path}: {exc}") from exc

    if not content.strip():
        raise SourceError(f"Document file is empty: {path}")

    hint = "yaml" if file_path.suffix.lower() in (".yaml", ".yml") else ""
    return content, hint


def _decode_content(content: str, hint: str = "") -> Document:
    """Decode *content* as YAML when hinted, JSON otherwise."""
    if hint != "yaml":
        return parse(content)

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise MalformedInputError(f"Invalid YAML: {exc}") from exc
    except RecursionError as exc:
        raise MalformedInputError("Invalid YAML: input nesting too deep") from exc
    return parse_obj(data)


def is_supported_version(version: str) -> bool:
    """Return True if *version* is an OpenRPC 1.x version string.

    Documents declaring another version still decode; callers use this to
    warn that the model may not match them.
    """
    major, _, rest = version.partition(".")
    return major == SUPPORTED_MAJOR_VERSION and bool(rest)
