# Yap language package
# A tokenizer, recursive-descent parser and tree-walking interpreter for Yap.
from .errors import (
    YapError, YapSyntaxError, YapReferenceError, YapTypeError, ArityError, YapRuntimeError,
)
from .interpreter import run_program, run_file, Interpreter
from .parser import parse, parse_program
from .lexer import tokenize

__all__ = [
    'run_program',
    'run_file',
    'Interpreter',
    'parse',
    'parse_program',
    'tokenize',
    'YapError',
    'YapSyntaxError',
    'YapReferenceError',
    'YapTypeError',
    'ArityError',
    'YapRuntimeError',
]
