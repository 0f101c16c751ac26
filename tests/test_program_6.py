from pathlib import Path

import pytest

from yap.errors import ArityError
from yap.interpreter import parse_program, Interpreter

EXAMPLE = Path(__file__).resolve().parent.parent / 'examples' / 'program_6.yap'


def test_program_6_arity_error(capsys):
    """Calling add with one argument aborts the run; earlier output stays."""
    source = EXAMPLE.read_text(encoding='utf-8')
    ast = parse_program(source)
    interp = Interpreter()
    with pytest.raises(ArityError) as excinfo:
        interp.run(ast)
    assert excinfo.value.kind == 'ArityError'
    assert 'add expects 2 arguments but got 1' in str(excinfo.value)
    out = capsys.readouterr().out.strip()
    assert out == 'before'
