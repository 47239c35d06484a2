"""Exceptions raised while reading and parsing process information."""


class ProcError(Exception):
    """Base class for every error raised by this package."""


class IncompleteError(ProcError):
    """The data ended before everything expected was found."""


class InternalError(ProcError):
    """The data was present but did not have the expected shape."""