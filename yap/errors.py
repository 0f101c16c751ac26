from typing import Any, Optional, Tuple


class YapError(Exception):
    """Base class for every error raised while parsing or running Yap code."""
    kind = 'Error'

    def __init__(self, message: str):
        super().__init__(f"{self.kind}: {message}")
        self.message = message


class YapSyntaxError(YapError):
    """Unexpected or missing token. Parsing never recovers from one."""
    kind = 'SyntaxError'

    def __init__(self, expected: str, found: str, position: Optional[Tuple[int, int]] = None,
                 message: Optional[str] = None):
        if message is None:
            message = f"expected {expected} but found {found}"
        if position is not None:
            message = f"{message} at {position[0]}:{position[1]}"
        super().__init__(message)
        self.expected = expected
        self.found = found
        self.position = position


class YapReferenceError(YapError):
    kind = 'ReferenceError'


class YapTypeError(YapError):
    kind = 'TypeError'


class ArityError(YapError):
    kind = 'ArityError'


class YapRuntimeError(YapError):
    kind = 'RuntimeError'


class ControlSignal:
    """Outcome of executing a statement."""
    __slots__ = ()
    name = 'normal'

    def __repr__(self) -> str:
        return f"<{self.name}>"


class NormalSignal(ControlSignal):
    __slots__ = ()


class BreakSignal(ControlSignal):
    __slots__ = ()
    name = 'break'


class ContinueSignal(ControlSignal):
    __slots__ = ()
    name = 'continue'


class ReturnSignal(ControlSignal):
    """Carries a return value up to the nearest call boundary."""
    __slots__ = ('value',)
    name = 'return'

    def __init__(self, value: Any):
        self.value = value


NORMAL = NormalSignal()
BREAK = BreakSignal()
CONTINUE = ContinueSignal()
