"""
Notch hook - Claude Code lifecycle events to local notch notifications.

Subpackages:
- hook_utils: Shared utilities (logging, I/O, paths, text, delivery)
- handlers: Tool-specific helpers (diff preview, command classification)
- dispatchers: One dispatcher per lifecycle event kind
- tests: Unit tests
"""

__version__ = "0.1.0"
