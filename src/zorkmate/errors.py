"""Exception types for Zorkmate."""


class ZorkmateError(Exception):
    """Base class for all Zorkmate errors."""


class WorldDataError(ZorkmateError):
    """The bundled map or walkthrough data is malformed."""


class InterpreterError(ZorkmateError):
    """The external story interpreter failed to load or to step."""


class UnknownMacroError(ZorkmateError, KeyError):
    """No macro is registered under the requested identifier."""

    def __init__(self, macro_id: str):
        super().__init__(macro_id)
        self.macro_id = macro_id

    def __str__(self) -> str:
        return f"Unknown macro: {self.macro_id!r}"
