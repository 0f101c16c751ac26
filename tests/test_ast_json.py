import json

import pytest

from yap.ast import Program, VariableDeclaration, Literal, For, Update, Identifier
from yap.ast_json import ast_to_obj, ast_from_obj
from yap.interpreter import Interpreter
from yap.parser import parse_program


def test_nodes_are_tagged_with_their_type():
    obj = ast_to_obj(parse_program('let x = 1;'))
    assert obj == {
        'type': 'Program',
        'body': [{
            'type': 'VariableDeclaration',
            'name': 'x',
            'init': {'type': 'Literal', 'value': 1.0},
        }],
    }


def test_optional_children_are_null():
    obj = ast_to_obj(parse_program('let x; for (;;) { break; }'))
    assert obj['body'][0]['init'] is None
    loop = obj['body'][1]
    assert loop['init'] is None and loop['test'] is None and loop['update'] is None


def test_reloaded_tree_matches_parsed_tree():
    source = 'for (let i = 0; i < 3; i++) { print(i); }'
    parsed = parse_program(source)
    reloaded = ast_from_obj(json.loads(json.dumps(ast_to_obj(parsed))))
    assert reloaded == parsed
    assert isinstance(reloaded.body[0], For)
    assert reloaded.body[0].update == Update('++', Identifier('i'))


def test_reloaded_program_runs(capsys):
    source = '''
    function counter() {
        let n = 0;
        function inc() { n++; return n; }
        return inc;
    }
    let c = counter();
    c();
    print(c(), "done");
    '''
    obj = json.loads(json.dumps(ast_to_obj(parse_program(source))))
    Interpreter().run(ast_from_obj(obj))
    assert capsys.readouterr().out == '2 done\n'


def test_hand_built_tree_serializes():
    program = Program([VariableDeclaration('y', Literal(2.5))])
    assert ast_to_obj(program)['body'][0]['init']['value'] == 2.5


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'Goto', 'label': 'x'})


def test_non_node_values_are_rejected():
    with pytest.raises(TypeError):
        ast_to_obj(object())
    with pytest.raises(ValueError):
        ast_from_obj({1, 2})


def test_literal_with_string_value_is_rejected():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'Literal', 'value': 'five'})


def test_assignment_to_non_identifier_is_rejected():
    obj = {
        'type': 'Assignment',
        'target': {'type': 'Literal', 'value': 1},
        'value': {'type': 'Literal', 'value': 2},
    }
    with pytest.raises(ValueError):
        ast_from_obj(obj)


def test_missing_required_child_is_rejected():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'While', 'body': {'type': 'Block', 'body': []}})


def test_dotted_member_needs_identifier_property():
    obj = {
        'type': 'Member',
        'object': {'type': 'Identifier', 'name': 'a'},
        'property': {'type': 'Literal', 'value': 0},
        'computed': False,
    }
    with pytest.raises(ValueError):
        ast_from_obj(obj)


def test_integer_literal_values_are_accepted():
    assert ast_from_obj({'type': 'Literal', 'value': 3}) == Literal(3)
