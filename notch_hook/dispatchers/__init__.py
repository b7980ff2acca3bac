"""Event dispatchers - one per lifecycle event kind."""
from notch_hook.dispatchers.base import (
    BaseDispatcher,
    SimpleDispatcher,
    ToolCategory,
    classify_tool,
)
