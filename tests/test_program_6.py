from pathlib import Path

import pytest

from minipl.errors import AssertionFailure, MiniPLRuntimeError
from minipl.interpreter import run_program

EXAMPLES = Path(__file__).parent.parent / 'examples'


def test_program_6_assertion_halts(capsys):
    source = (EXAMPLES / 'program_6.mpl').read_text(encoding='utf-8')
    with pytest.raises(AssertionFailure) as info:
        run_program(source)
    assert not isinstance(info.value, MiniPLRuntimeError)
    assert info.value.source_text == 'total = 7'
    assert info.value.position.line == 8
    out = capsys.readouterr().out
    # output printed before the failure survives, nothing after it runs
    assert out == '6\n'
