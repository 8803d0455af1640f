"""Abstract Syntax Tree (AST) definitions for the Lox language.

The AST classes defined in this module represent the syntactic structure
of parsed Lox programs. They are produced once by the parser and are
never mutated afterwards: every node is a frozen dataclass and statement
sequences are stored as tuples.

There are two closed families of nodes. `Expr` covers everything that
produces a value, `Stmt` covers everything that is executed for effect.
The interpreter dispatches on the concrete class of each node.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

from .tokens import Token


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


# Expressions

@dataclass(frozen=True)
class Literal(Node):
    value: Any  # float, str, bool or NIL


@dataclass(frozen=True)
class Grouping(Node):
    expression: 'Expr'


@dataclass(frozen=True)
class Unary(Node):
    operator: Token
    right: 'Expr'


@dataclass(frozen=True)
class Binary(Node):
    left: 'Expr'
    operator: Token
    right: 'Expr'


@dataclass(frozen=True)
class Logical(Node):
    left: 'Expr'
    operator: Token  # AND or OR
    right: 'Expr'


@dataclass(frozen=True)
class Variable(Node):
    name: Token


@dataclass(frozen=True)
class Assign(Node):
    name: Token
    value: 'Expr'


Expr = Union[Literal, Grouping, Unary, Binary, Logical, Variable, Assign]


# Statements

@dataclass(frozen=True)
class ExpressionStmt(Node):
    expression: Expr


@dataclass(frozen=True)
class Print(Node):
    expression: Expr


@dataclass(frozen=True)
class Var(Node):
    name: Token
    initializer: Optional[Expr] = None


@dataclass(frozen=True)
class Block(Node):
    statements: Tuple['Stmt', ...]

    def __post_init__(self):
        # accept any sequence but always store a tuple
        if not isinstance(self.statements, tuple):
            object.__setattr__(self, 'statements', tuple(self.statements))


@dataclass(frozen=True)
class If(Node):
    condition: Expr
    then_branch: 'Stmt'
    else_branch: Optional['Stmt'] = None


@dataclass(frozen=True)
class While(Node):
    condition: Expr
    body: 'Stmt'


Stmt = Union[ExpressionStmt, Print, Var, Block, If, While]
