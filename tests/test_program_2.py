from pathlib import Path

from minipl.checker import TypeChecker
from minipl.interpreter import Interpreter
from minipl.parser import parse_program

EXAMPLES = Path(__file__).parent.parent / 'examples'


def test_program_2_arithmetic_precedence(capsys):
    source = (EXAMPLES / 'program_2.mpl').read_text(encoding='utf-8')
    ast = parse_program(source)
    TypeChecker().check(ast)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == '16'
    assert interp.global_env.get('X') == 16
