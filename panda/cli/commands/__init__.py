# panda/cli/commands/__init__.py
"""CLI command implementations, registered by panda.cli.cli."""
