"""CLI command implementations for the penetrations application.

This package contains subcommands for the penetrations CLI:
- validate: Validate a scene file
"""

from penetrations.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
