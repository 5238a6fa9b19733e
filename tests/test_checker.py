import pytest

from minipl.ast import BinaryOp, IntLiteral, Print, Program
from minipl.checker import TypeChecker, check_program
from minipl.errors import (
    LoopVariableAssignmentError, MissingTypeError, RedeclarationError,
    StaticError, TypeMismatchError, UndeclaredVariableError,
)
from minipl.parser import parse_program
from minipl.tokens import Position
from minipl.types import BOOL, INT, STRING


def first_error(source):
    with pytest.raises(StaticError) as info:
        check_program(source)
    return info.value


def test_well_typed_program_passes():
    program = check_program('''
        var n : int := 3;
        var s : string := "a" + "b";
        var b : bool := n < 4 & !(s = "ab");
        var i : int;
        for i in 1..n do
            print i;
        end for;
        read n;
        read s;
        assert (b = false);
    ''')
    assert len(program.body) == 8


def test_expressions_are_annotated():
    program = check_program('var x := 1 + 2 * 3; print x = 7; print "a" + "b";')
    decl = program.body[0]
    assert decl.expr.static_type == INT
    assert decl.expr.right.static_type == INT
    assert program.body[1].expr.static_type == BOOL
    assert program.body[1].expr.left.static_type == INT
    assert program.body[2].expr.static_type == STRING


def test_inferred_declaration_type_is_used():
    err = first_error('var s := "text"; s := 1;')
    assert isinstance(err, TypeMismatchError)


def test_initializer_type_must_match_declared_type():
    err = first_error('var x : bool := 1;')
    assert isinstance(err, TypeMismatchError)
    assert err.position.column == 17


def test_missing_type():
    err = first_error('var x;')
    assert isinstance(err, MissingTypeError)
    assert (err.position.line, err.position.column) == (1, 1)


def test_redeclaration():
    err = first_error('var x : int;\nvar x : string;')
    assert isinstance(err, RedeclarationError)
    assert err.position.line == 2


def test_no_shadowing_inside_loop_body():
    err = first_error('var x : int; var i : int; for i in 1..2 do var x : int; end for;')
    assert isinstance(err, RedeclarationError)


def test_disjoint_loops_may_declare_the_same_name():
    check_program('''
        var i : int;
        for i in 1..2 do var tmp : int := i; print tmp; end for;
        for i in 1..2 do var tmp : string := "x"; print tmp; end for;
        var tmp : bool;
    ''')


def test_loop_body_names_are_not_visible_after_the_loop():
    err = first_error('var i : int; for i in 1..2 do var t : int; end for; print t;')
    assert isinstance(err, UndeclaredVariableError)


def test_undeclared_variable_in_expression():
    err = first_error('print y + 1;')
    assert isinstance(err, UndeclaredVariableError)
    assert err.position.column == 7


def test_initializer_cannot_mention_the_new_variable():
    err = first_error('var x : int := x + 1;')
    assert isinstance(err, UndeclaredVariableError)


def test_assignment_to_undeclared_variable():
    err = first_error('y := 1;')
    assert isinstance(err, UndeclaredVariableError)


def test_assignment_type_mismatch():
    err = first_error('var x : int; x := "one";')
    assert isinstance(err, TypeMismatchError)


def test_loop_variable_must_be_declared():
    err = first_error('for i in 1..2 do end for;')
    assert isinstance(err, UndeclaredVariableError)


def test_loop_variable_must_be_int():
    err = first_error('var s : string; for s in 1..2 do end for;')
    assert isinstance(err, TypeMismatchError)


def test_loop_bounds_must_be_int():
    err = first_error('var i : int; for i in 1.."3" do end for;')
    assert isinstance(err, TypeMismatchError)
    assert err.position.column == 26


def test_loop_variable_cannot_be_assigned_in_body():
    err = first_error('var i : int; for i in 1..2 do i := 5; end for;')
    assert isinstance(err, LoopVariableAssignmentError)


def test_loop_variable_cannot_be_read_in_body():
    err = first_error('var i : int; for i in 1..2 do read i; end for;')
    assert isinstance(err, LoopVariableAssignmentError)


def test_loop_variable_cannot_control_nested_loop():
    err = first_error('var i : int; for i in 1..2 do for i in 1..3 do end for; end for;')
    assert isinstance(err, LoopVariableAssignmentError)


def test_loop_variable_is_assignable_after_the_loop():
    check_program('var i : int; for i in 1..2 do print i; end for; i := 0;')


def test_read_into_bool_is_rejected():
    err = first_error('var b : bool; read b;')
    assert isinstance(err, TypeMismatchError)


def test_read_into_undeclared_variable():
    err = first_error('read b;')
    assert isinstance(err, UndeclaredVariableError)


def test_assert_requires_bool():
    err = first_error('assert (1 + 1);')
    assert isinstance(err, TypeMismatchError)


def test_print_accepts_every_type():
    check_program('print 1; print "s"; print true;')


@pytest.mark.parametrize('expr', [
    '1 + "a"',
    '"a" - "b"',
    'true + true',
    '"a" * 2',
    '1 = "1"',
    'true < 1',
    '1 & 2',
    '-"a"',
    '!1',
])
def test_operator_type_errors(expr):
    err = first_error(f'print {expr};')
    assert isinstance(err, TypeMismatchError)


@pytest.mark.parametrize('expr, expected', [
    ('1 + 2', INT),
    ('"a" + "b"', STRING),
    ('4 / 2 - 1', INT),
    ('"a" < "b"', BOOL),
    ('true = false', BOOL),
    ('false < true', BOOL),
    ('true & !false', BOOL),
    ('-(1 * 3)', INT),
])
def test_operator_result_types(expr, expected):
    program = check_program(f'print {expr};')
    assert program.body[0].expr.static_type == expected


def test_first_error_in_statement_order_wins():
    err = first_error('''
        var a : int := "wrong";
        print undeclared;
    ''')
    assert isinstance(err, TypeMismatchError)
    assert err.position.line == 2


def test_first_error_is_left_to_right_within_an_expression():
    err = first_error('print missing + ("a" - 1);')
    assert isinstance(err, UndeclaredVariableError)


def test_redeclaration_is_checked_before_the_initializer():
    err = first_error('var x : int; var x : int := nothing;')
    assert isinstance(err, RedeclarationError)


def test_checking_is_deterministic():
    source = 'var a : int := 1; var b : bool := a + "x"; print zzz;'
    program = parse_program(source)
    errors = []
    for _ in range(2):
        with pytest.raises(StaticError) as info:
            TypeChecker().check(program)
        errors.append((type(info.value), info.value.position, info.value.message))
    assert errors[0] == errors[1]


def test_checker_instance_can_be_reused():
    checker = TypeChecker()
    checker.check(parse_program('var x : int;'))
    checker.check(parse_program('var x : string;'))


def test_long_operator_chain_is_annotated():
    program = check_program('print ' + ' & '.join(['true'] * 3000) + ';')
    assert program.body[0].expr.static_type == BOOL
    assert program.body[0].expr.left.static_type == BOOL


def test_excessive_nesting_is_a_static_error():
    expr = IntLiteral(1)
    for _ in range(5000):
        expr = BinaryOp('+', IntLiteral(1), expr)
    program = Program([Print(expr, pos=Position(3, 1))])
    with pytest.raises(StaticError) as info:
        TypeChecker().check(program)
    assert 'nested too deeply' in info.value.message
    assert info.value.position == Position(3, 1)
