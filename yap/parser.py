"""Recursive-descent parser for the Yap language.

The parser consumes the token list produced by :mod:`yap.lexer` and
builds a :class:`~yap.ast.Program`. Expressions are parsed by precedence
climbing, one method per level, from assignment (loosest, right
associative) down to primary expressions. Any unexpected token aborts
parsing with a :class:`~yap.errors.YapSyntaxError`; there is no recovery.
"""

from __future__ import annotations

import ast as py_ast
from typing import List, Optional, Tuple

from .ast import (
    Program, Block, FunctionDeclaration, VariableDeclaration, If, For, While,
    Break, Continue, Return, ExpressionStatement, Literal, StringLiteral,
    Identifier, Binary, Logical, Unary, Assignment, Update, Call, Member,
    Array, Node,
)
from .errors import YapSyntaxError
from .lexer import (
    Token, tokenize, CALL_KEYWORD, KEYWORD, IDENTIFIER, NUMBER, STRING, PUNCTUATION,
)

EQUALITY_OPS = ('==', '===', '!=', '!==')
RELATIONAL_OPS = ('<', '>', '<=', '>=')
ADDITIVE_OPS = ('+', '-')
MULTIPLICATIVE_OPS = ('*', '/', '%')
UNARY_OPS = ('!', '-', '+')
UPDATE_OPS = ('++', '--')


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0
        # Number of loops enclosing the current statement inside the
        # current function body.
        self.loop_depth = 0

    # Cursor helpers

    def peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def position(self) -> Tuple[int, int]:
        token = self.peek()
        if token is not None:
            return (token.line, token.column)
        if self.tokens:
            last = self.tokens[-1]
            return (last.line, last.column + len(last.text))
        return (1, 1)

    def found(self) -> str:
        token = self.peek()
        return str(token) if token is not None else 'end of input'

    def error(self, expected: str) -> YapSyntaxError:
        return YapSyntaxError(expected, self.found(), self.position())

    def check(self, text: str, kind: Optional[str] = None) -> bool:
        token = self.peek()
        if token is None or token.text != text:
            return False
        if kind is not None:
            return token.kind == kind
        return token.kind in (PUNCTUATION, KEYWORD)

    def check_any(self, texts: Tuple[str, ...]) -> bool:
        token = self.peek()
        return token is not None and token.kind == PUNCTUATION and token.text in texts

    def consume(self, text: str) -> Token:
        """Consume a punctuation or keyword token with the given text."""
        if not self.check(text):
            raise self.error(repr(text))
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def consume_kind(self, kind: str) -> Token:
        token = self.peek()
        if token is None or token.kind != kind:
            raise self.error(kind)
        self.pos += 1
        return token

    def match(self, text: str) -> bool:
        if self.check(text):
            self.pos += 1
            return True
        return False

    # Statements

    def parse_program(self) -> Program:
        statements: List[Node] = []
        while not self.at_end():
            if self.match(';'):
                continue
            statements.append(self.parse_statement())
        return Program(statements)

    def parse_statement(self) -> Node:
        token = self.peek()
        if token is None:
            raise self.error('statement')
        if token.kind == KEYWORD:
            if token.text == 'function':
                return self.parse_function_declaration()
            if token.text == 'let':
                decl = self.parse_variable_declaration()
                self.consume(';')
                return decl
            if token.text == 'if':
                return self.parse_if()
            if token.text == 'for':
                return self.parse_for()
            if token.text == 'while':
                return self.parse_while()
            if token.text == 'return':
                return self.parse_return()
            if token.text in ('break', 'continue'):
                return self.parse_loop_jump()
            if token.text != CALL_KEYWORD:
                raise self.error('statement')
        if self.check('{'):
            return self.parse_block()
        expr = self.parse_expression()
        self.consume(';')
        return ExpressionStatement(expr)

    def parse_block(self) -> Block:
        self.consume('{')
        statements: List[Node] = []
        while not self.check('}'):
            if self.at_end():
                raise self.error("'}'")
            if self.match(';'):
                continue
            statements.append(self.parse_statement())
        self.consume('}')
        return Block(statements)

    def parse_function_declaration(self) -> FunctionDeclaration:
        self.consume('function')
        name = self.consume_kind(IDENTIFIER).text
        self.consume('(')
        params: List[str] = []
        if not self.check(')'):
            params.append(self.consume_kind(IDENTIFIER).text)
            while self.match(','):
                params.append(self.consume_kind(IDENTIFIER).text)
        self.consume(')')
        # break/continue may not cross a function boundary
        saved_depth = self.loop_depth
        self.loop_depth = 0
        try:
            body = self.parse_block()
        finally:
            self.loop_depth = saved_depth
        return FunctionDeclaration(name, params, body)

    def parse_variable_declaration(self) -> VariableDeclaration:
        self.consume('let')
        name = self.consume_kind(IDENTIFIER).text
        init: Optional[Node] = None
        if self.match('='):
            init = self.parse_expression()
        return VariableDeclaration(name, init)

    def parse_if(self) -> If:
        self.consume('if')
        self.consume('(')
        test = self.parse_expression()
        self.consume(')')
        consequent = self.parse_block()
        alternate: Optional[Node] = None
        if self.match('else'):
            if self.check('if'):
                alternate = self.parse_if()
            else:
                alternate = self.parse_block()
        return If(test, consequent, alternate)

    def parse_for(self) -> For:
        self.consume('for')
        self.consume('(')
        init: Optional[Node] = None
        if self.check('let'):
            init = self.parse_variable_declaration()
        elif not self.check(';'):
            init = self.parse_expression()
        self.consume(';')
        test = None if self.check(';') else self.parse_expression()
        self.consume(';')
        update = None if self.check(')') else self.parse_expression()
        self.consume(')')
        body = self.parse_loop_body()
        return For(init, test, update, body)

    def parse_while(self) -> While:
        self.consume('while')
        self.consume('(')
        test = self.parse_expression()
        self.consume(')')
        return While(test, self.parse_loop_body())

    def parse_loop_body(self) -> Block:
        self.loop_depth += 1
        try:
            return self.parse_block()
        finally:
            self.loop_depth -= 1

    def parse_return(self) -> Return:
        self.consume('return')
        argument = None if self.check(';') else self.parse_expression()
        self.consume(';')
        return Return(argument)

    def parse_loop_jump(self) -> Node:
        token = self.peek()
        if self.loop_depth == 0:
            raise YapSyntaxError(
                'statement', str(token), (token.line, token.column),
                message=f"'{token.text}' outside of a loop",
            )
        self.pos += 1
        self.consume(';')
        return Break() if token.text == 'break' else Continue()

    # Expressions, loosest binding first

    def parse_expression(self) -> Node:
        return self.parse_assignment()

    def parse_assignment(self) -> Node:
        start = self.position()
        left = self.parse_logical_or()
        if self.check('='):
            if not isinstance(left, Identifier):
                raise YapSyntaxError('identifier', 'invalid assignment target', start,
                                     message='invalid assignment target')
            self.consume('=')
            return Assignment(left, self.parse_assignment())
        return left

    def parse_logical_or(self) -> Node:
        node = self.parse_logical_and()
        while self.match('||'):
            node = Logical('||', node, self.parse_logical_and())
        return node

    def parse_logical_and(self) -> Node:
        node = self.parse_equality()
        while self.match('&&'):
            node = Logical('&&', node, self.parse_equality())
        return node

    def parse_equality(self) -> Node:
        node = self.parse_relational()
        while self.check_any(EQUALITY_OPS):
            op = self.consume_kind(PUNCTUATION).text
            node = Binary(op, node, self.parse_relational())
        return node

    def parse_relational(self) -> Node:
        node = self.parse_additive()
        while self.check_any(RELATIONAL_OPS):
            op = self.consume_kind(PUNCTUATION).text
            node = Binary(op, node, self.parse_additive())
        return node

    def parse_additive(self) -> Node:
        node = self.parse_multiplicative()
        while self.check_any(ADDITIVE_OPS):
            op = self.consume_kind(PUNCTUATION).text
            node = Binary(op, node, self.parse_multiplicative())
        return node

    def parse_multiplicative(self) -> Node:
        node = self.parse_unary()
        while self.check_any(MULTIPLICATIVE_OPS):
            op = self.consume_kind(PUNCTUATION).text
            node = Binary(op, node, self.parse_unary())
        return node

    def parse_unary(self) -> Node:
        if self.check_any(UNARY_OPS):
            op = self.consume_kind(PUNCTUATION).text
            return Unary(op, self.parse_unary())
        return self.parse_postfix()

    def parse_postfix(self) -> Node:
        start = self.position()
        node = self.parse_left_hand_side()
        if self.check_any(UPDATE_OPS):
            if not isinstance(node, Identifier):
                raise YapSyntaxError('identifier', 'invalid update target', start,
                                     message='invalid update target')
            op = self.consume_kind(PUNCTUATION).text
            return Update(op, node)
        return node

    def parse_left_hand_side(self) -> Node:
        # `hop on f()` is an ordinary call with a decorative prefix
        if self.match(CALL_KEYWORD):
            node = self.parse_left_hand_side()
            if not isinstance(node, Call):
                raise self.error("'('")
            return node
        node = self.parse_primary()
        while True:
            if self.match('('):
                node = Call(node, self.parse_expression_list(')'))
                continue
            if self.match('.'):
                name = self.consume_kind(IDENTIFIER).text
                node = Member(node, Identifier(name), computed=False)
                continue
            if self.match('['):
                key = self.parse_expression()
                self.consume(']')
                node = Member(node, key, computed=True)
                continue
            return node

    def parse_expression_list(self, closing: str) -> List[Node]:
        """Parse comma separated expressions up to and including `closing`."""
        items: List[Node] = []
        if not self.check(closing):
            items.append(self.parse_expression())
            while self.match(','):
                items.append(self.parse_expression())
        self.consume(closing)
        return items

    def parse_primary(self) -> Node:
        token = self.peek()
        if token is None:
            raise self.error('expression')
        if token.kind == NUMBER:
            self.pos += 1
            return Literal(float(token.text))
        if token.kind == STRING:
            # quoted text with escapes, same literal syntax as Python
            try:
                value = py_ast.literal_eval(token.text)
            except (ValueError, SyntaxError):
                raise self.error('valid string literal') from None
            self.pos += 1
            return StringLiteral(value)
        if token.kind == IDENTIFIER:
            self.pos += 1
            return Identifier(token.text)
        if self.match('('):
            expr = self.parse_expression()
            self.consume(')')
            return expr
        if self.match('['):
            return Array(self.parse_expression_list(']'))
        raise self.error('expression')


def parse(tokens: List[Token]) -> Program:
    """Parse a token list into a Program AST."""
    parser = Parser(tokens)
    try:
        return parser.parse_program()
    except RecursionError:
        raise YapSyntaxError('expression', parser.found(), parser.position(),
                             message='expression nested too deeply') from None


def parse_program(source: str) -> Program:
    """Tokenize and parse Yap source code into a Program AST."""
    return parse(tokenize(source))
