"""Exceptions raised while converting between dotMind and freemind files."""


class ConversionError(Exception):
    """Base class for every failure that aborts a conversion."""


class PathTraversalError(ConversionError):
    """An archive entry would be extracted outside the destination directory."""


class ArchiveIOError(ConversionError):
    """The zip container couldn't be opened, created, read or written."""


class DecodeError(ConversionError, ValueError):
    """The JSON or XML payload is unparsable or structurally incomplete."""


class FileIOError(ConversionError, OSError):
    """Reading or writing a translated document failed."""
