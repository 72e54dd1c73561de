# app/errors.py


class TypecoachError(Exception):
    """Base class for errors raised by the typing core."""


class SessionFinishedError(TypecoachError, RuntimeError):
    """A keystroke arrived after the session already finished."""


class InvalidPassageError(TypecoachError, ValueError):
    pass
