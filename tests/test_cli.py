import json
import sys

import pytest

from yap.__main__ import main


@pytest.fixture(autouse=True)
def restore_recursion_limit():
    limit = sys.getrecursionlimit()
    yield
    sys.setrecursionlimit(limit)


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding='utf-8')
    return path


def test_runs_program(tmp_path, capsys):
    path = write(tmp_path, 'hello.yap', 'print("hello", 1 + 1);')
    main([str(path)])
    assert capsys.readouterr().out == 'hello 2\n'


def test_emit_ast_then_run_it(tmp_path, capsys):
    path = write(tmp_path, 'sum.yap', 'let s = 0; for (let i = 1; i <= 4; i++) { s = s + i; } print(s);')
    main(['--emit-ast', str(path)])
    out_path = tmp_path / 'sum.yap.ast.json'
    assert capsys.readouterr().out.strip() == str(out_path)
    assert json.loads(out_path.read_text(encoding='utf-8'))['type'] == 'Program'

    main(['--ast', str(out_path)])
    assert capsys.readouterr().out == '10\n'


def test_emit_js(tmp_path, capsys):
    path = write(tmp_path, 'p.yap', 'let a = [1, 2]; print(a.length);')
    main(['--emit-js', str(path)])
    assert capsys.readouterr().out == 'let a = [1, 2];\nconsole.log(a.length);\n'


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / 'nope.yap')])
    assert excinfo.value.code == 1
    assert 'cannot read' in capsys.readouterr().err


def test_runtime_error_goes_to_stderr(tmp_path, capsys):
    path = write(tmp_path, 'bad.yap', 'print("first"); print(missing);')
    with pytest.raises(SystemExit) as excinfo:
        main([str(path)])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == 'first\n'
    assert captured.err.strip() == 'ReferenceError: missing is not defined'


def test_syntax_error_goes_to_stderr(tmp_path, capsys):
    path = write(tmp_path, 'bad.yap', 'let = 3;')
    with pytest.raises(SystemExit) as excinfo:
        main([str(path)])
    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith('SyntaxError: expected identifier')


def test_invalid_ast_file(tmp_path, capsys):
    path = write(tmp_path, 'broken.json', '{"type": "Nonsense"}')
    with pytest.raises(SystemExit) as excinfo:
        main(['--ast', str(path)])
    assert excinfo.value.code == 1
    assert 'invalid AST file' in capsys.readouterr().err


def test_program_argument_required(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2
    assert 'missing program file' in capsys.readouterr().err


def test_malformed_ast_node_is_reported(tmp_path, capsys):
    bad = {
        'type': 'Program',
        'body': [{'type': 'ExpressionStatement', 'expr': {'type': 'Literal', 'value': 'x'}}],
    }
    path = write(tmp_path, 'bad.json', json.dumps(bad))
    with pytest.raises(SystemExit) as excinfo:
        main(['--ast', str(path)])
    assert excinfo.value.code == 1
    assert 'invalid AST file' in capsys.readouterr().err


def test_ast_file_must_hold_a_program(tmp_path, capsys):
    path = write(tmp_path, 'expr.json', '{"type": "Identifier", "name": "x"}')
    with pytest.raises(SystemExit) as excinfo:
        main(['--ast', str(path)])
    assert excinfo.value.code == 1
    assert 'top-level node must be a Program' in capsys.readouterr().err
