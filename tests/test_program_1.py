from pathlib import Path

from yap.interpreter import parse_program, Interpreter

EXAMPLE = Path(__file__).resolve().parent.parent / 'examples' / 'program_1.yap'


def test_program_1_top_level_return(capsys):
    source = EXAMPLE.read_text(encoding='utf-8')
    ast = parse_program(source)
    interp = Interpreter()
    result = interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == '6'
    assert result == 6
    assert interp.global_env.get('a') == 6
