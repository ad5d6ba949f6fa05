from __future__ import annotations


class ReckonError(Exception):
    """ Base class for all reckon errors"""

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} at position {self.position}"


class ReckonSyntaxError(ReckonError):
    """ Raised when the source text or a serialised tree cannot be parsed"""


class ReckonNameError(ReckonError):
    """ Raised when a name is used in a way its binding does not allow"""


class ReckonUnboundSymbol(ReckonNameError):
    """ Raised when a variable is used before it is bound"""


class ReckonArityError(ReckonError):
    """ Raised when the number of arguments passed to a function is incorrect"""

    def __init__(self, name: str, expected: int | str, actual: int):
        singular = expected == 1 or str(expected).endswith(" 1")
        super().__init__(
            f"{name} expects {expected} argument{'' if singular else 's'}, got {actual}"
        )
        self.name = name
        self.expected = expected
        self.actual = actual


class ReckonDomainError(ReckonError):
    """ Raised when an argument is outside the domain of an operation"""


class ReckonDefinitionError(ReckonError):
    """ Raised when a binding cannot be made"""


class ReckonRecursionError(ReckonError):
    """ Raised when user function calls nest deeper than the configured limit"""
