"""The `print` built-in (also bound as `yapping`)."""

import sys
from typing import Any, Callable, List, Optional, Set, TextIO

from yap.builtin_function import NativeFunction
from yap.environment import Environment
from yap.types import ArrayVal, UNDEFINED, to_string


def inspect(value: Any, nested: bool = False, _active: Optional[Set[int]] = None) -> str:
    """Render a value the way a console log line shows it.

    An array that contains itself shows the repeated reference as
    ``[Circular]``.
    """
    if isinstance(value, ArrayVal):
        if not value.items:
            return '[]'
        active = _active if _active is not None else set()
        if id(value) in active:
            return '[Circular]'
        active.add(id(value))
        try:
            parts = [inspect(item, True, active) for item in value.items]
        finally:
            active.discard(id(value))
        return '[ ' + ', '.join(parts) + ' ]'
    if nested and isinstance(value, str):
        return repr(value)
    return to_string(value)


def populate_console(env: Environment, stdout: Optional[Callable[[], TextIO]] = None) -> None:
    def output() -> TextIO:
        return stdout() if stdout is not None else sys.stdout

    def std_print(args: List[Any]) -> Any:
        print(' '.join(inspect(a) for a in args), file=output())
        return UNDEFINED

    print_fn = NativeFunction('print', None, std_print)
    env.declare('print', print_fn)
    env.declare('yapping', print_fn)
