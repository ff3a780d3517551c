"""Command-line support for HotRefactor: output helpers and command handlers."""
