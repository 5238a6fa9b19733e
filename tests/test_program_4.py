import io
from pathlib import Path

from minipl.interpreter import run_program
from minipl.std.io import BasicIO

EXAMPLES = Path(__file__).parent.parent / 'examples'


def test_program_4_factorial(capsys):
    source = (EXAMPLES / 'program_4.mpl').read_text(encoding='utf-8')
    run_program(source, reader=BasicIO(stdin=io.StringIO('5')))
    out = capsys.readouterr().out.strip()
    assert out == 'Give a numberThe result is: 120'


def test_program_4_factorial_of_zero(capsys):
    source = (EXAMPLES / 'program_4.mpl').read_text(encoding='utf-8')
    run_program(source, reader=BasicIO(stdin=io.StringIO('0\n')))
    out = capsys.readouterr().out.strip()
    assert out == 'Give a numberThe result is: 1'
