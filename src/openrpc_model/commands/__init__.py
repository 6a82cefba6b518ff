"""Built-in CLI sub-commands for openrpc-model.

* :mod:`~openrpc_model.commands.document` -- ``show`` and ``check``, which
  decode a whole document.
* :mod:`~openrpc_model.commands.inspect` -- ``inspect`` group with tables of
  methods, components and errors, and the API info.

Single commands are plain callback functions registered on the root app;
groups export a :class:`typer.Typer` sub-application.
"""
