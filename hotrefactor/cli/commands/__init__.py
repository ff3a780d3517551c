"""
CLI command handlers.

Organized by functional domain:
- refactoring.py: listing and applying refactorings at a position
- config.py: configuration display and initialization
"""

from .config import cmd_config
from .refactoring import cmd_actions, cmd_apply, resolve_position

__all__ = ["cmd_actions", "cmd_apply", "cmd_config", "resolve_position"]
