"""Runtime values and coercion helpers for Yap.

Yap values map onto Python objects as follows:

* Number    -> ``float``
* String    -> ``str``
* Boolean   -> ``bool``
* Undefined -> the :data:`UNDEFINED` singleton
* Array     -> :class:`ArrayVal` (shared by reference)
* Function  -> :class:`FunctionValue`
* native    -> :class:`~yap.builtin_function.NativeFunction`
* namespace -> :class:`NamespaceVal` (e.g. ``Math``)

The coercion rules follow the JavaScript operators the language borrows.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Set, TYPE_CHECKING

if TYPE_CHECKING:
    from .ast import Block
    from .environment import Environment


class Undefined:
    """Marker object for the Yap `undefined` value."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'undefined'

    def __bool__(self) -> bool:
        return False


UNDEFINED = Undefined()

# String forms accepted by numeric coercion; anything else is NaN.
NUMERIC_STRING = re.compile(r'[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|Infinity)')
RADIX_STRING = re.compile(r'0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)')


@dataclass(eq=False)
class ArrayVal:
    """A Yap array. Assigning or passing it shares the same list."""
    items: List[Any] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Array({self.items!r})"


@dataclass(eq=False)
class NamespaceVal:
    """A read-only bag of named values reached through member access."""
    name: str
    members: Dict[str, Any]

    def __repr__(self) -> str:
        return f"<namespace {self.name}>"


class FunctionValue:
    """A user-defined function closed over its defining environment."""
    def __init__(self, name: str, params: List[str], body: 'Block', closure: 'Environment'):
        self.name = name
        self.params = params
        self.body = body
        self.closure = closure

    def __repr__(self) -> str:
        return f"<function {self.name}>"


def type_name(value: Any) -> str:
    from .builtin_function import NativeFunction
    if isinstance(value, bool):
        return 'Boolean'
    if isinstance(value, (int, float)):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    if value is UNDEFINED:
        return 'Undefined'
    if isinstance(value, ArrayVal):
        return 'Array'
    if isinstance(value, (FunctionValue, NativeFunction)):
        return 'Function'
    if isinstance(value, NamespaceVal):
        return 'Object'
    return type(value).__name__


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_number(x: float) -> str:
    """Shortest round-tripping form, laid out the way JavaScript prints numbers.

    Plain decimal notation for magnitudes in [1e-7, 1e21), exponent
    notation (``1e-7``, ``1.5e+21``) outside that range.
    """
    if math.isnan(x):
        return 'NaN'
    if math.isinf(x):
        return 'Infinity' if x > 0 else '-Infinity'
    if x == 0:
        return '0'
    sign = '-' if x < 0 else ''
    _, digit_tuple, exponent = Decimal(repr(abs(x))).as_tuple()
    digits = list(digit_tuple)
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exponent += 1
    text = ''.join(str(d) for d in digits)
    k = len(text)
    # position of the decimal point relative to the first digit
    n = exponent + k
    if k <= n <= 21:
        return sign + text + '0' * (n - k)
    if 0 < n <= 21:
        return sign + text[:n] + '.' + text[n:]
    if -6 < n <= 0:
        return sign + '0.' + '0' * -n + text
    e = n - 1
    mantissa = text if k == 1 else text[0] + '.' + text[1:]
    return f"{sign}{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"


def to_string(value: Any, _active: Optional[Set[int]] = None) -> str:
    """Convert a value to its printable string form."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if is_number(value):
        return format_number(float(value))
    if isinstance(value, str):
        return value
    if value is UNDEFINED:
        return 'undefined'
    if isinstance(value, ArrayVal):
        # an array reached again while it is being joined renders as ''
        active = _active if _active is not None else set()
        if id(value) in active:
            return ''
        active.add(id(value))
        try:
            return ','.join('' if item is UNDEFINED else to_string(item, active)
                            for item in value.items)
        finally:
            active.discard(id(value))
    if isinstance(value, FunctionValue):
        return f"[function {value.name}]"
    if isinstance(value, NamespaceVal):
        return f"[object {value.name}]"
    return str(value)


def to_number(value: Any) -> float:
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if is_number(value):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if text == '':
            return 0.0
        if NUMERIC_STRING.fullmatch(text):
            return float(text)
        if RADIX_STRING.fullmatch(text):
            return float(int(text, 0))
        return math.nan
    if isinstance(value, ArrayVal):
        if not value.items:
            return 0.0
        if len(value.items) == 1:
            return to_number(to_string(value.items[0]))
    return math.nan


def is_truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if is_number(value):
        return not (value == 0 or math.isnan(value))
    if isinstance(value, str):
        return len(value) > 0
    if value is UNDEFINED:
        return False
    return True


def strict_equals(a: Any, b: Any) -> bool:
    """`===`: same type and same value; arrays and functions by identity."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if is_number(a) and is_number(b):
        return float(a) == float(b)
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    return a is b


def loose_equals(a: Any, b: Any) -> bool:
    """`==`: compare after coercing numbers, strings and booleans."""
    if type_name(a) == type_name(b):
        return strict_equals(a, b)
    if isinstance(a, bool):
        return loose_equals(to_number(a), b)
    if isinstance(b, bool):
        return loose_equals(a, to_number(b))
    if is_number(a) and isinstance(b, str):
        return float(a) == to_number(b)
    if isinstance(a, str) and is_number(b):
        return to_number(a) == float(b)
    if isinstance(a, ArrayVal) and isinstance(b, (str, int, float)):
        return loose_equals(to_string(a), b)
    if isinstance(b, ArrayVal) and isinstance(a, (str, int, float)):
        return loose_equals(a, to_string(b))
    return False
