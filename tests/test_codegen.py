from pathlib import Path

from yap.codegen import generate
from yap.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def js(source):
    return generate(parse_program(source))


def test_print_becomes_console_log():
    assert js('print("hi", 1);') == 'console.log("hi", 1);\n'
    assert js('yapping(2.5);') == 'console.log(2.5);\n'


def test_slang_keywords_are_written_out():
    assert js('rizz x = 1; goon (x) { bruh; }') == (
        'let x = 1;\n'
        'while (x) {\n'
        '  break;\n'
        '}\n'
    )


def test_function_and_return():
    assert js('function add(a, b) { return a + b; }') == (
        'function add(a, b) {\n'
        '  return a + b;\n'
        '}\n'
    )


def test_else_if_chain_stays_flat():
    source = 'if (a) { f(); } else if (b) { g(); } else { h(); }'
    assert js(source) == (
        'if (a) {\n'
        '  f();\n'
        '} else if (b) {\n'
        '  g();\n'
        '} else {\n'
        '  h();\n'
        '}\n'
    )


def test_parentheses_follow_precedence():
    assert js('x = (1 + 2) * 3;') == 'x = (1 + 2) * 3;\n'
    assert js('x = 1 + 2 * 3;') == 'x = 1 + 2 * 3;\n'
    assert js('x = 1 - (2 - 3);') == 'x = 1 - (2 - 3);\n'
    assert js('x = (a || b) && c;') == 'x = (a || b) && c;\n'
    assert js('a = b = 1;') == 'a = b = 1;\n'


def test_unary_spacing():
    assert js('x = - -y;') == 'x = - -y;\n'
    assert js('x = !(a == b);') == 'x = !(a == b);\n'


def test_members_arrays_and_updates():
    assert js('xs[i].push([1, "a"]); i++;') == 'xs[i].push([1, "a"]);\n++i;\n'


def test_fizzbuzz_example():
    output = js((EXAMPLES / 'program_2.yap').read_text(encoding='utf-8'))
    lines = output.splitlines()
    assert lines[0] == 'function fizzbuzz(n) {'
    assert lines[1] == '  for (let i = 1; i <= n; ++i) {'
    assert lines[2] == '    if (i % 3 == 0 && i % 5 == 0) {'
    assert '    } else if (i % 3 == 0) {' in lines
    assert lines[-1] == 'fizzbuzz(15);'


def test_update_value_matches_interpreter():
    assert js('print(i++ * 2, -i--);') == 'console.log(++i * 2, - --i);\n'


def test_hop_on_prefix_is_dropped():
    assert js('x = hop on f() + 1;') == 'x = f() + 1;\n'
