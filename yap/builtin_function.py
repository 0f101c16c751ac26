from dataclasses import dataclass
from typing import Any, Callable, List, Optional


@dataclass
class NativeFunction:
    name: str
    arity: Optional[int]  # None means variadic
    fn: Callable[[List[Any]], Any]

    def __repr__(self) -> str:
        return f"<native {self.name}>"
