from pathlib import Path

from yap.interpreter import parse_program, Interpreter

EXAMPLE = Path(__file__).resolve().parent.parent / 'examples' / 'program_2.yap'


def test_program_2_fizzbuzz(capsys):
    source = EXAMPLE.read_text(encoding='utf-8')
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert len(out_lines) == 15
    assert out_lines == [
        '1', '2', 'Fizz', '4', 'Buzz', 'Fizz', '7', '8', 'Fizz', 'Buzz',
        '11', 'Fizz', '13', '14', 'FizzBuzz',
    ]
