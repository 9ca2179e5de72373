"""Built-in CLI sub-commands for cdd.

* :mod:`~cdd.commands.init` -- scaffold a new workspace.
* :mod:`~cdd.commands.sync` -- translate the spec and reconcile services.
* :mod:`~cdd.commands.inspect` -- print the IR of the workspace's spec.

``init`` and ``sync`` are plain callbacks registered on the root app;
``inspect`` is a :class:`typer.Typer` sub-application.
"""
