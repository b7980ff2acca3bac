"""Exception types for the notch hook."""


class NotchHookError(Exception):
    """Base class for hook errors."""


class MalformedEvent(NotchHookError):
    """Event document on stdin is not well-formed or lacks hook_event_name."""


class SetupError(NotchHookError):
    """Mandatory startup I/O failed (e.g. the diff cache cannot be created)."""


class PreviewError(NotchHookError):
    """Preview artifacts could not be persisted."""
