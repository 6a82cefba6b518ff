"""openrpc-model -- typed, validated model of OpenRPC API description documents.

This package decodes an OpenRPC document (the JSON description of a JSON-RPC
service's methods, parameters, results, errors and servers) into a tree of
frozen Pydantic models, rejecting malformed input with errors that point at
the failing field.

Typical usage::

    from openrpc_model.parser import parse

    doc = parse(open("openrpc.json", encoding="utf-8").read())
    for method in doc.methods:
        print(method.name, method.param_structure.value)

Modules:
    models: Pydantic models for every OpenRPC entity.
    parser: Decoder (JSON text to models) and document loader.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    app: Typer application and CLI entry point.
    output: stdout/stderr formatting system with Rich support.
    config: Filesystem locations used by the CLI.
"""

__version__ = "0.1.0"
