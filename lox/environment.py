from typing import Any, Dict, Optional

from lox.errors import Fault, FaultKind, LoxRuntimeError
from lox.tokens import Token


class Environment:
    """A scope frame mapping variable names to values.

    Frames are linked through `enclosing` into a chain that ends at the
    global frame. Lookups and assignments walk the chain outward;
    definitions only ever touch this frame.
    """
    def __init__(self, enclosing: Optional['Environment'] = None):
        self.enclosing = enclosing
        self.values: Dict[str, Any] = {}

    @property
    def depth(self) -> int:
        # number of frames between this one and the global frame
        depth = 0
        env = self.enclosing
        while env is not None:
            depth += 1
            env = env.enclosing
        return depth

    def get(self, name: Token) -> Any:
        if name.lexeme in self.values:
            return self.values[name.lexeme]
        if self.enclosing is not None:
            return self.enclosing.get(name)
        raise LoxRuntimeError(Fault(FaultKind.UNDEFINED_VARIABLE, name, f"undefined variable '{name.lexeme}'"))

    def assign(self, name: Token, value: Any):
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
            return
        if self.enclosing is None:
            raise LoxRuntimeError(Fault(FaultKind.UNDEFINED_VARIABLE, name, f"undefined variable '{name.lexeme}'"))
        self.enclosing.assign(name, value)

    def define(self, name: Token, value: Any):
        if name.lexeme in self.values:
            raise LoxRuntimeError(Fault(
                FaultKind.DUPLICATE_VARIABLE_NAME, name,
                f"variable '{name.lexeme}' already declared in this scope",
            ))
        self.values[name.lexeme] = value

    def __contains__(self, name: str) -> bool:
        return name in self.values
