"""Inspect commands -- examine the contents of an OpenRPC document.

Provides the ``openrpc-model inspect`` sub-command group with read-only
commands for viewing methods, API info, component pools and declared errors.
Every sub-command decodes the document first and exits with the decode
error's code if that fails.
"""

from __future__ import annotations

import typer

from openrpc_model.commands.document import load_or_exit
from openrpc_model.output import format_response, info, print_table


inspect_app = typer.Typer(no_args_is_help=True)

_SOURCE_HELP = "Document path, URL, or '-' for stdin."


@inspect_app.command("methods")
def inspect_methods(
    source: str = typer.Argument(..., help=_SOURCE_HELP),
) -> None:
    """List all methods.

    Displays a table of every method in document order with its parameter
    names, result name (or ``(notification)``), parameter structure and
    deprecation status.

    Example::

        openrpc-model inspect methods openrpc.json
    """
    document = load_or_exit(source)

    if not document.methods:
        info("No methods defined in this document.")
        return

    headers = ["Name", "Params", "Result", "Structure", "Deprecated"]
    rows: list[list[str]] = []
    for method in document.methods:
        rows.append([
            method.name,
            ", ".join(p.name for p in method.params) or "-",
            method.result.name if method.result else "(notification)",
            method.param_structure.value,
            "Yes" if method.deprecated else "",
        ])

    print_table(
        headers, rows, title=f"{document.info.title} -- Methods ({len(rows)})"
    )


@inspect_app.command("info")
def inspect_info(
    source: str = typer.Argument(..., help=_SOURCE_HELP),
) -> None:
    """Show API info (title, version, description, servers, etc.).

    Servers are listed as the document would be served: when none are
    declared, the implicit ``localhost`` server is shown.

    Example::

        openrpc-model --json inspect info openrpc.json
    """
    document = load_or_exit(source)
    api = document.info

    data: dict = {
        "title": api.title,
        "version": api.version,
        "openrpc": document.openrpc,
        "description": api.description or "-",
        "servers": [s.url for s in document.effective_servers()],
        "methods": len(document.methods),
    }

    if api.contact and api.contact.email:
        data["contact"] = api.contact.email
    if api.license:
        data["license"] = api.license.name
    if document.external_docs:
        data["external_docs"] = document.external_docs.url

    format_response(data)


@inspect_app.command("components")
def inspect_components(
    source: str = typer.Argument(..., help=_SOURCE_HELP),
) -> None:
    """List the reusable component pools and their entry names.

    Example::

        openrpc-model inspect components openrpc.json
    """
    document = load_or_exit(source)

    if document.components.is_empty():
        info("No components defined in this document.")
        return

    headers = ["Pool", "Count", "Names"]
    rows: list[list[str]] = []
    for pool, entries in document.components.pools().items():
        names = sorted(entries)
        listed = ", ".join(names[:5])
        if len(names) > 5:
            listed += "..."
        rows.append([pool, str(len(names)), listed or "-"])

    print_table(headers, rows, title="Components")


@inspect_app.command("errors")
def inspect_errors(
    source: str = typer.Argument(..., help=_SOURCE_HELP),
) -> None:
    """List every declared error with its code.

    Errors declared inline on methods are listed under the method name;
    errors in the component pool under ``#/components/errors/<key>``. Codes
    in the range reserved by JSON-RPC are flagged.

    Example::

        openrpc-model inspect errors openrpc.json
    """
    document = load_or_exit(source)

    declared = [
        (method.name, err) for method in document.methods for err in method.errors
    ]
    declared.extend(
        (f"#/components/errors/{key}", err)
        for key, err in sorted(document.components.errors.items())
    )

    if not declared:
        info("No errors declared in this document.")
        return

    headers = ["Declared In", "Code", "Message", "Reserved"]
    rows = [
        [owner, str(err.code), err.message, "Yes" if err.is_reserved else ""]
        for owner, err in declared
    ]
    print_table(headers, rows, title=f"Errors ({len(rows)})")
