"""OpenRPC document parser -- decode JSON text and load documents from sources.

Typical usage::

    from openrpc_model.parser import parse, load_document

    doc = parse(raw_json_text)
    doc = load_document("https://example.com/openrpc.json")

Sub-modules:

* :mod:`~openrpc_model.parser.decoder` -- the single-pass decoder from JSON
  text to :class:`~openrpc_model.models.Document`, with error translation.
* :mod:`~openrpc_model.parser.loader` -- I/O layer (URL, file, stdin) plus
  YAML support and OpenRPC version checks.
"""

from openrpc_model.parser.decoder import parse, parse_obj
from openrpc_model.parser.loader import is_supported_version, load_document

__all__ = ["parse", "parse_obj", "load_document", "is_supported_version"]
