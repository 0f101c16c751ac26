from pathlib import Path

from yap.interpreter import parse_program, Interpreter

EXAMPLE = Path(__file__).resolve().parent.parent / 'examples' / 'program_4.yap'


def test_program_4_array_index(capsys):
    source = EXAMPLE.read_text(encoding='utf-8')
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == '2'
