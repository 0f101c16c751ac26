"""Abstract Syntax Tree (AST) definitions for the Yap language.

The parser builds these nodes and the interpreter walks them. Every node
is owned by exactly one parent, so a parsed program is always a tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


# Statements

@dataclass
class Program(Node):
    body: List[Node]


@dataclass
class Block(Node):
    body: List[Node]


@dataclass
class FunctionDeclaration(Node):
    name: str
    params: List[str]
    body: Block


@dataclass
class VariableDeclaration(Node):
    name: str
    init: Optional[Node] = None


@dataclass
class If(Node):
    test: Node
    consequent: Block
    alternate: Optional[Node] = None  # Block or a nested If for else-if


@dataclass
class For(Node):
    init: Optional[Union[VariableDeclaration, Node]]
    test: Optional[Node]
    update: Optional[Node]
    body: Block


@dataclass
class While(Node):
    test: Node
    body: Block


@dataclass
class Break(Node):
    pass


@dataclass
class Continue(Node):
    pass


@dataclass
class Return(Node):
    argument: Optional[Node] = None


@dataclass
class ExpressionStatement(Node):
    expr: Node


# Expressions

@dataclass
class Literal(Node):
    value: float


@dataclass
class StringLiteral(Node):
    value: str


@dataclass
class Identifier(Node):
    name: str


@dataclass
class Binary(Node):
    op: str
    left: Node
    right: Node


@dataclass
class Logical(Node):
    op: str  # '&&' or '||'
    left: Node
    right: Node


@dataclass
class Unary(Node):
    op: str
    operand: Node


@dataclass
class Assignment(Node):
    target: Identifier
    value: Node


@dataclass
class Update(Node):
    op: str  # '++' or '--'
    target: Identifier


@dataclass
class Call(Node):
    callee: Node
    args: List[Node]


@dataclass
class Member(Node):
    object: Node
    property: Node  # Identifier when not computed
    computed: bool


@dataclass
class Array(Node):
    elements: List[Node]


STATEMENT_TYPES = (
    Program, Block, FunctionDeclaration, VariableDeclaration, If, For,
    While, Break, Continue, Return, ExpressionStatement,
)

EXPRESSION_TYPES = (
    Literal, StringLiteral, Identifier, Binary, Logical, Unary,
    Assignment, Update, Call, Member, Array,
)
