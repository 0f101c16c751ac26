"""The `Math` namespace: numeric helper functions and constants."""

import math
import random
from typing import Any, Callable, List

from yap.builtin_function import NativeFunction
from yap.types import NamespaceVal, to_number


def _safe(fn: Callable[..., float]) -> Callable[..., float]:
    # Domain and range errors become NaN / Infinity instead of raising.
    def wrapper(*xs: float) -> float:
        try:
            return float(fn(*xs))
        except ValueError:
            return math.nan
        except OverflowError:
            return math.inf
        except ZeroDivisionError:
            return math.inf
    return wrapper


def _round(x: float) -> float:
    # halves round towards +Infinity
    if math.isnan(x) or math.isinf(x):
        return x
    return float(math.floor(x + 0.5))


def _sign(x: float) -> float:
    if math.isnan(x):
        return x
    if x > 0:
        return 1.0
    if x < 0:
        return -1.0
    return x


def _cbrt(x: float) -> float:
    return math.copysign(abs(x) ** (1.0 / 3.0), x)


def _pow(x: float, y: float) -> float:
    if math.isnan(y) or (abs(x) == 1 and math.isinf(y)):
        return math.nan
    if x == 0 and y < 0:
        return math.inf
    return math.pow(x, y)


def _log(x: float) -> float:
    if x == 0:
        return -math.inf
    return math.log(x)


def _log_base(base: float) -> Callable[[float], float]:
    def log_fn(x: float) -> float:
        if x == 0:
            return -math.inf
        return math.log(x, base)
    return log_fn


def _ceil(x: float) -> float:
    return x if math.isnan(x) or math.isinf(x) else math.ceil(x)


def _floor(x: float) -> float:
    return x if math.isnan(x) or math.isinf(x) else math.floor(x)


def _trunc(x: float) -> float:
    return x if math.isnan(x) or math.isinf(x) else math.trunc(x)


def _min(*xs: float) -> float:
    if any(math.isnan(x) for x in xs):
        return math.nan
    return min(xs, default=math.inf)


def _max(*xs: float) -> float:
    if any(math.isnan(x) for x in xs):
        return math.nan
    return max(xs, default=-math.inf)


FIXED_ARITY = {
    'abs': (1, abs),
    'ceil': (1, _ceil),
    'floor': (1, _floor),
    'round': (1, _round),
    'trunc': (1, _trunc),
    'sign': (1, _sign),
    'sqrt': (1, math.sqrt),
    'cbrt': (1, _cbrt),
    'exp': (1, math.exp),
    'log': (1, _log),
    'log2': (1, _log_base(2)),
    'log10': (1, _log_base(10)),
    'sin': (1, math.sin),
    'cos': (1, math.cos),
    'tan': (1, math.tan),
    'asin': (1, math.asin),
    'acos': (1, math.acos),
    'atan': (1, math.atan),
    'atan2': (2, math.atan2),
    'pow': (2, _pow),
    'random': (0, random.random),
}

VARIADIC = {
    'min': _min,
    'max': _max,
    'hypot': math.hypot,
}


def _native(name: str, arity, fn: Callable[..., float]) -> NativeFunction:
    safe = _safe(fn)

    def call(args: List[Any]) -> float:
        return safe(*(to_number(a) for a in args))
    return NativeFunction(f"Math.{name}", arity, call)


def create_math_namespace() -> NamespaceVal:
    members = {
        'PI': math.pi,
        'E': math.e,
    }
    for name, (arity, fn) in FIXED_ARITY.items():
        members[name] = _native(name, arity, fn)
    for name, fn in VARIADIC.items():
        members[name] = _native(name, None, fn)
    return NamespaceVal('Math', members)
