import math
from typing import Callable, Optional, TextIO

from yap.environment import Environment
from yap.types import UNDEFINED
from .console import populate_console, inspect
from .numeric import create_math_namespace


def create_global_environment(stdout: Optional[Callable[[], TextIO]] = None) -> Environment:
    """Build the global scope with the built-ins pre-bound.

    `stdout` returns the stream `print` writes to; it is looked up on every
    call so that a redirected `sys.stdout` is honoured.
    """
    env = Environment()
    env.declare('true', True)
    env.declare('false', False)
    env.declare('undefined', UNDEFINED)
    env.declare('NaN', math.nan)
    env.declare('Infinity', math.inf)
    populate_console(env, stdout)
    math_ns = create_math_namespace()
    env.declare('Math', math_ns)
    env.declare('nerdShit', math_ns)
    return env


__all__ = ['create_global_environment', 'inspect']
