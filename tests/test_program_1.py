from pathlib import Path

from minipl.interpreter import run_program

EXAMPLES = Path(__file__).parent.parent / 'examples'


def test_program_1(capsys):
    source = (EXAMPLES / 'program_1.mpl').read_text(encoding='utf-8')
    run_program(source)
    out = capsys.readouterr().out
    assert out == 'Hello World!!\n'
