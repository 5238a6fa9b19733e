from pathlib import Path

from minipl.interpreter import run_program

EXAMPLES = Path(__file__).parent.parent / 'examples'


def test_program_9_loop_scopes(capsys):
    source = (EXAMPLES / 'program_9.mpl').read_text(encoding='utf-8')
    interp = run_program(source)
    out = capsys.readouterr().out
    assert out == 'row 1\nrow 2\n30'
    assert interp.global_env.get('i') == 3
    # an empty range leaves the control variable untouched
    assert interp.global_env.get('j') == 0
