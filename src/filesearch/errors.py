"""
Exception types shared across the filesearch package.
"""


class FileSearchError(Exception):
    """Base class for errors raised by filesearch."""
    pass


class ChannelError(FileSearchError):
    """Raised when a one-shot channel is used incorrectly."""
    pass


class RevealError(FileSearchError):
    """Raised when a path cannot be shown in the platform file manager."""
    pass
