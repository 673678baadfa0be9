"""Exception types raised by the EHEX codec and image model.

File-system failures are not wrapped: they surface as the builtin OSError
subclasses (FileNotFoundError, PermissionError, ...).
"""


class EhexError(Exception):
    """Base class for every error raised by ehex."""


class FormatError(EhexError, ValueError):
    """Text is not a well-formed EHEX document (bad magic, header or body)."""


class UnsupportedVersionError(EhexError):
    """A recognised EHEX family or version that this decoder does not read."""


class TruncatedDataError(FormatError):
    """The pixel body is shorter than the SIZE header declares."""
