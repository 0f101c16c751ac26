import pytest

from yap.errors import YapSyntaxError
from yap.lexer import tokenize, Token


def kinds_and_texts(source):
    return [(t.kind, t.text) for t in tokenize(source)]


def test_declaration_tokens():
    assert kinds_and_texts('let x = 42;') == [
        ('keyword', 'let'),
        ('identifier', 'x'),
        ('punctuation', '='),
        ('number', '42'),
        ('punctuation', ';'),
    ]


def test_multi_character_operators_are_single_tokens():
    texts = [t.text for t in tokenize('a === b !== c == d != e <= f >= g && h || i++ j--')]
    assert texts == [
        'a', '===', 'b', '!==', 'c', '==', 'd', '!=', 'e', '<=', 'f', '>=', 'g',
        '&&', 'h', '||', 'i', '++', 'j', '--',
    ]


def test_strings_keep_quotes_and_escapes():
    tokens = tokenize('"a \\"b\\"" \'c\'')
    assert [t.kind for t in tokens] == ['string', 'string']
    assert tokens[0].text == '"a \\"b\\""'
    assert tokens[1].text == "'c'"


def test_numbers():
    assert [t.text for t in tokenize('1 2.5 .5 1e3')] == ['1', '2.5', '.5', '1e3']


def test_comments_and_whitespace_are_skipped():
    source = 'let a = 1; // trailing\n/* block\n comment */ a;'
    assert [t.text for t in tokenize(source)] == ['let', 'a', '=', '1', ';', 'a', ';']


def test_keyword_prefix_is_identifier():
    assert kinds_and_texts('letter iffy') == [('identifier', 'letter'), ('identifier', 'iffy')]


def test_slang_keywords_are_normalised():
    tokens = tokenize('skibidi rizz cooked edging amogus flex goon bussin bruh grind')
    assert all(t.kind == 'keyword' for t in tokens)
    assert [t.text for t in tokens] == [
        'function', 'let', 'let', 'if', 'else', 'for', 'while', 'return', 'break', 'continue',
    ]


def test_positions_are_recorded():
    tokens = tokenize('let a;\n  a = 2;')
    assert tokens[0] == Token('keyword', 'let', 1, 1)
    assert (tokens[3].line, tokens[3].column) == (2, 3)


def test_unknown_character_is_a_syntax_error():
    with pytest.raises(YapSyntaxError) as excinfo:
        tokenize('let a = 1 # 2;')
    assert excinfo.value.position == (1, 11)
    assert excinfo.value.found == "'#'"


def test_empty_source():
    assert tokenize('') == []


def test_hop_on_is_one_call_keyword():
    tokens = tokenize('print(hop on  main() + 5);')
    assert (tokens[2].kind, tokens[2].text) == ('keyword', 'call')
    assert (tokens[2].line, tokens[2].column) == (1, 7)
    assert tokens[3] == Token('identifier', 'main', 1, 15)


def test_hop_and_on_alone_stay_identifiers():
    assert kinds_and_texts('hop; hop online;') == [
        ('identifier', 'hop'),
        ('punctuation', ';'),
        ('identifier', 'hop'),
        ('identifier', 'online'),
        ('punctuation', ';'),
    ]
