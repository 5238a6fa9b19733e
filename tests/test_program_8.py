from pathlib import Path

import pytest

from minipl.errors import TypeMismatchError
from minipl.interpreter import run_program

EXAMPLES = Path(__file__).parent.parent / 'examples'


def test_program_8_type_error_before_any_output(capsys):
    source = (EXAMPLES / 'program_8.mpl').read_text(encoding='utf-8')
    with pytest.raises(TypeMismatchError) as info:
        run_program(source)
    assert info.value.position.line == 2
    out = capsys.readouterr().out
    assert out == ''
