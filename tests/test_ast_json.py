import io
import json

import pytest

from minipl.ast import Expr
from minipl.ast_json import ast_from_obj, ast_to_obj, load_as
from minipl.checker import TypeChecker
from minipl.interpreter import Interpreter
from minipl.parser import parse_program
from minipl.std.io import BasicIO
from minipl.types import INT

SOURCE = '''var n : int := 3;
var name := "mini";
var ok : bool;
for n in 1..n * 2 do
    print -n + 1;
end for;
ok := !(n < 2) & name = "mini";
read name;
assert (ok);
'''


def test_json_round_trip_preserves_tree_and_positions():
    program = parse_program(SOURCE)
    text = json.dumps(ast_to_obj(program))
    loaded = ast_from_obj(json.loads(text))
    assert loaded == program
    assert loaded.body[3].pos == program.body[3].pos
    assert loaded.body[3].body[0].expr.pos == program.body[3].body[0].expr.pos
    assert loaded.body[6].source_text == 'ok'


def test_serialized_shape():
    obj = ast_to_obj(parse_program('var x : int := 1;'))
    decl = obj['body'][0]
    assert decl['type'] == 'VarDecl'
    assert decl['type_spec'] == {'__type__': 'TypeSpec', 'value': {'kind': 'int'}}
    assert decl['expr'] == {'type': 'IntLiteral', 'value': 1, 'pos': [1, 16]}
    assert decl['pos'] == [1, 1]


def test_static_types_are_not_serialized():
    program = TypeChecker().check(parse_program('print 1 + 2;'))
    assert program.body[0].expr.static_type == INT
    obj = ast_to_obj(program)
    assert 'static_type' not in obj['body'][0]['expr']
    assert ast_from_obj(obj).body[0].expr.static_type is None


def test_loaded_program_checks_and_runs():
    obj = json.loads(json.dumps(ast_to_obj(parse_program(SOURCE))))
    program = TypeChecker().check(ast_from_obj(obj))
    out = io.StringIO()
    console = BasicIO(stdin=io.StringIO('other\n'), stdout=out)
    interp = Interpreter(reader=console, writer=console)
    interp.run(program)
    assert out.getvalue() == '0-1-2-3-4-5'
    assert interp.global_env.get('n') == 7
    assert interp.global_env.get('name') == 'other'


def test_loading_rejects_misplaced_nodes():
    obj = {'type': 'Program', 'body': [{'type': 'Ident', 'name': 'x', 'pos': [1, 1]}]}
    with pytest.raises(TypeError):
        ast_from_obj(obj)
    assert load_as(None, Expr, optional=True) is None
