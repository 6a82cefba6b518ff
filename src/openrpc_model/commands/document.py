"""Document commands -- decode a document and print it or report on it.

``openrpc-model show`` prints the whole decoded tree; ``openrpc-model check``
only reports whether the document decodes. Both accept a file path, an
HTTP(S) URL, or ``-`` for stdin.
"""

from __future__ import annotations

import typer

from openrpc_model.exceptions import DecodeError, OpenRpcModelError
from openrpc_model.models import Document
from openrpc_model.output import debug, error, print_model, success, warning


def load_or_exit(source: str) -> Document:
    """Load and decode *source*, exiting with the error's exit code on failure.

    Args:
        source: File path, URL, or ``-`` for stdin.

    Returns:
        The decoded document.

    Raises:
        typer.Exit: With the exit code of the
            :class:`~openrpc_model.exceptions.OpenRpcModelError` raised while
            loading or decoding.
    """
    from openrpc_model.parser import load_document

    debug(f"Loading document from {source}")
    try:
        return load_document(source)
    except DecodeError as exc:
        error(f"Invalid OpenRPC document: {exc}")
        debug(f"Entity chain: {' > '.join(exc.types)}")
        raise typer.Exit(code=exc.exit_code) from None
    except OpenRpcModelError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def show_command(
    source: str = typer.Argument(..., help="Document path, URL, or '-' for stdin."),
) -> None:
    """Decode a document and print the full model tree.

    Example::

        openrpc-model show openrpc.json
        openrpc-model --json show https://example.com/openrpc.json
    """
    document = load_or_exit(source)
    print_model(document)


def check_command(
    source: str = typer.Argument(..., help="Document path, URL, or '-' for stdin."),
) -> None:
    """Check that a document decodes, without printing it.

    Warns when the declared ``openrpc`` version is outside the 1.x line.

    Example::

        openrpc-model check openrpc.json && echo ok
    """
    from openrpc_model.parser import is_supported_version

    document = load_or_exit(source)
    if not is_supported_version(document.openrpc):
        warning(
            f"openrpc version {document.openrpc!r} is not 1.x; "
            "the model may not describe this document fully"
        )
    success(
        f"Valid OpenRPC {document.openrpc} document: "
        f"{document.info.title} ({len(document.methods)} methods)"
    )
