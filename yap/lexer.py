"""Tokenizer for the Yap language.

Source text is split into a flat list of tokens by a Lark grammar used
only for its lexer. A post-lexing stage turns identifiers that spell a
keyword, or one of the slang aliases Yap inherited from its first
version, into keyword tokens carrying the canonical keyword text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List

from lark import Lark
from lark import Token as LarkToken
from lark.exceptions import UnexpectedCharacters

from .errors import YapSyntaxError

KEYWORD = 'keyword'
IDENTIFIER = 'identifier'
NUMBER = 'number'
STRING = 'string'
PUNCTUATION = 'punctuation'

KEYWORDS = frozenset({
    'function', 'let', 'if', 'else', 'for', 'while', 'return', 'break', 'continue',
})

# Spelled `hop on`; marks the call expression that follows it.
CALL_KEYWORD = 'call'

SLANG_KEYWORDS = {
    'skibidi': 'function',
    'rizz': 'let',
    'cooked': 'let',
    'edging': 'if',
    'amogus': 'else',
    'flex': 'for',
    'goon': 'while',
    'bussin': 'return',
    'bruh': 'break',
    'grind': 'continue',
}


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return f"{self.kind} {self.text!r}"


YAP_LEXER_GRAMMAR = r"""
    start: (KEYWORD | CALL_PREFIX | IDENTIFIER | NUMBER | STRING | PUNCTUATION)*

    %declare KEYWORD

    IDENTIFIER: /[A-Za-z_$][A-Za-z0-9_$]*/
    NUMBER: /(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?/
    STRING: /"(\\.|[^"\\\n])*"/ | /'(\\.|[^'\\\n])*'/
    CALL_PREFIX.2: /hop\s+on(?![A-Za-z0-9_$])/
    PUNCTUATION: /===|!==|==|!=|<=|>=|&&|\|\||\+\+|--|[-+*\/%=<>!(){}\[\];,.]/

    LINE_COMMENT.3: /\/\/[^\n]*/
    BLOCK_COMMENT.3: /\/\*[\s\S]*?\*\//

    %import common.WS
    %ignore WS
    %ignore LINE_COMMENT
    %ignore BLOCK_COMMENT
"""


class KeywordPostLex:
    """Reclassify identifier tokens that are keywords or slang aliases.

    The two-word `hop on` call prefix becomes the keyword `call`.
    """
    always_accept = ()

    def process(self, stream: Iterator[LarkToken]) -> Iterator[LarkToken]:
        for tok in stream:
            if tok.type == 'CALL_PREFIX':
                tok = tok.update('KEYWORD', CALL_KEYWORD)
            elif tok.type == 'IDENTIFIER':
                if tok.value in KEYWORDS:
                    tok = tok.update('KEYWORD', tok.value)
                elif tok.value in SLANG_KEYWORDS:
                    tok = tok.update('KEYWORD', SLANG_KEYWORDS[tok.value])
            yield tok


YAP_LEXER = Lark(
    YAP_LEXER_GRAMMAR,
    parser='lalr',
    lexer='basic',
    postlex=KeywordPostLex(),
)


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens.

    Raises YapSyntaxError at the first character that cannot start a token.
    """
    tokens: List[Token] = []
    try:
        for tok in YAP_LEXER.lex(source):
            tokens.append(Token(tok.type.lower(), str(tok.value), tok.line, tok.column))
    except UnexpectedCharacters as e:
        raise YapSyntaxError('token', repr(e.char), (e.line, e.column)) from None
    return tokens
