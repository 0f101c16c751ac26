"""JavaScript backend for the Yap AST.

Renders a parsed program as JavaScript source text. This is an
alternative output only; the interpreter never goes through it.
"""

from __future__ import annotations

import json
from typing import List

from .ast import (
    Program, Block, FunctionDeclaration, VariableDeclaration, If, For, While,
    Break, Continue, Return, ExpressionStatement, Literal, StringLiteral,
    Identifier, Binary, Logical, Unary, Assignment, Update, Call, Member,
    Array, Node,
)
from .types import format_number

BUILTIN_NAMES = {
    'print': 'console.log',
    'yapping': 'console.log',
}

# Binding strength of each expression form, loosest first.
PRECEDENCE = {
    '=': 1,
    '||': 2,
    '&&': 3,
    '==': 4, '===': 4, '!=': 4, '!==': 4,
    '<': 5, '>': 5, '<=': 5, '>=': 5,
    '+': 6, '-': 6,
    '*': 7, '/': 7, '%': 7,
}
UNARY_PRECEDENCE = 8
MEMBER_PRECEDENCE = 10


class JavaScriptGenerator:
    def __init__(self, indent: str = '  '):
        self.indent_unit = indent
        self.indent = 0
        self.lines: List[str] = []

    def generate(self, program: Program) -> str:
        self.lines = []
        self.indent = 0
        for stmt in program.body:
            self._emit_stmt(stmt)
        return '\n'.join(self.lines) + '\n'

    def _line(self, text: str = '') -> None:
        self.lines.append(self.indent_unit * self.indent + text if text else '')

    def _emit_body(self, block: Block) -> None:
        self.indent += 1
        for stmt in block.body:
            self._emit_stmt(stmt)
        self.indent -= 1

    def _emit_stmt(self, node: Node) -> None:
        if isinstance(node, ExpressionStatement):
            self._line(f"{self._expr(node.expr)};")
        elif isinstance(node, VariableDeclaration):
            self._line(f"{self._var_decl(node)};")
        elif isinstance(node, FunctionDeclaration):
            self._line(f"function {node.name}({', '.join(node.params)}) {{")
            self._emit_body(node.body)
            self._line('}')
        elif isinstance(node, Block):
            self._line('{')
            self._emit_body(node)
            self._line('}')
        elif isinstance(node, If):
            self._emit_if(node)
        elif isinstance(node, For):
            init = ''
            if isinstance(node.init, VariableDeclaration):
                init = self._var_decl(node.init)
            elif node.init is not None:
                init = self._expr(node.init)
            test = self._expr(node.test) if node.test is not None else ''
            update = self._expr(node.update) if node.update is not None else ''
            self._line(f"for ({init}; {test}; {update}) {{")
            self._emit_body(node.body)
            self._line('}')
        elif isinstance(node, While):
            self._line(f"while ({self._expr(node.test)}) {{")
            self._emit_body(node.body)
            self._line('}')
        elif isinstance(node, Return):
            if node.argument is None:
                self._line('return;')
            else:
                self._line(f"return {self._expr(node.argument)};")
        elif isinstance(node, Break):
            self._line('break;')
        elif isinstance(node, Continue):
            self._line('continue;')
        else:
            raise TypeError(f"unknown statement node {type(node).__name__}")

    def _emit_if(self, node: If, head: str = 'if') -> None:
        self._line(f"{head} ({self._expr(node.test)}) {{")
        self._emit_body(node.consequent)
        if isinstance(node.alternate, If):
            self._emit_if(node.alternate, '} else if')
        elif node.alternate is not None:
            self._line('} else {')
            self._emit_body(node.alternate)
            self._line('}')
        else:
            self._line('}')

    def _var_decl(self, node: VariableDeclaration) -> str:
        if node.init is None:
            return f"let {node.name}"
        return f"let {node.name} = {self._expr(node.init)}"

    def _expr(self, node: Node, parent: int = 0) -> str:
        text, prec = self._expr_prec(node)
        if prec < parent:
            return f"({text})"
        return text

    def _expr_prec(self, node: Node):
        if isinstance(node, Literal):
            return format_number(node.value), MEMBER_PRECEDENCE
        if isinstance(node, StringLiteral):
            return json.dumps(node.value), MEMBER_PRECEDENCE
        if isinstance(node, Identifier):
            return BUILTIN_NAMES.get(node.name, node.name), MEMBER_PRECEDENCE
        if isinstance(node, (Binary, Logical)):
            prec = PRECEDENCE[node.op]
            left = self._expr(node.left, prec)
            right = self._expr(node.right, prec + 1)
            return f"{left} {node.op} {right}", prec
        if isinstance(node, Unary):
            operand = self._expr(node.operand, UNARY_PRECEDENCE)
            if node.op in '+-' and operand[:1] in ('+', '-'):
                operand = ' ' + operand  # keep "- -x" from becoming "--x"
            return f"{node.op}{operand}", UNARY_PRECEDENCE
        if isinstance(node, Assignment):
            return f"{node.target.name} = {self._expr(node.value, 1)}", 1
        if isinstance(node, Update):
            # prefix form, since Yap's x++ evaluates to the new value
            return f"{node.op}{node.target.name}", UNARY_PRECEDENCE
        if isinstance(node, Call):
            args = ', '.join(self._expr(a, 1) for a in node.args)
            return f"{self._expr(node.callee, MEMBER_PRECEDENCE)}({args})", MEMBER_PRECEDENCE
        if isinstance(node, Member):
            obj = self._expr(node.object, MEMBER_PRECEDENCE)
            if node.computed:
                return f"{obj}[{self._expr(node.property)}]", MEMBER_PRECEDENCE
            return f"{obj}.{node.property.name}", MEMBER_PRECEDENCE
        if isinstance(node, Array):
            return '[' + ', '.join(self._expr(e, 1) for e in node.elements) + ']', MEMBER_PRECEDENCE
        raise TypeError(f"unknown expression node {type(node).__name__}")


def generate(program: Program) -> str:
    """Render a Program AST as JavaScript source."""
    return JavaScriptGenerator().generate(program)
