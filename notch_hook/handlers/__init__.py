"""Tool-specific helpers used by the dispatchers."""
