from typing import Any, Dict, Optional

from yap.errors import YapReferenceError


class Environment:
    """A scope: name bindings plus a link to the enclosing scope.

    Closures hold a reference to the environment they were defined in, so
    a scope lives as long as any function value or active call refers to it.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    def __contains__(self, name: str) -> bool:
        return self.resolve(name) is not None

    def resolve(self, name: str) -> Optional['Environment']:
        """Return the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env
            env = env.parent
        return None

    def get(self, name: str) -> Any:
        env = self.resolve(name)
        if env is None:
            raise YapReferenceError(f'{name} is not defined')
        return env.values[name]

    def set(self, name: str, value: Any) -> Any:
        """Update the nearest existing binding of `name`.

        Assignment never creates a binding; use `declare` for that.
        """
        env = self.resolve(name)
        if env is None:
            raise YapReferenceError(f'cannot assign to undeclared variable {name}')
        env.values[name] = value
        return value

    def declare(self, name: str, value: Any) -> None:
        """Create a binding in this scope, shadowing any outer one."""
        self.values[name] = value

    def child(self) -> 'Environment':
        return Environment(parent=self)
