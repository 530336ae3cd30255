from click.testing import CliRunner

from intcode.sasm.masm import collect_file, compile
from intcode.sasm.loader import load_file

import unit_utils


def test_collect_file():
    item = collect_file(str(unit_utils.find_file('testdata/asm/countdown.iasm')))

    assert item.modulename == 'countdown'
    assert item.namespace() == 'countdown'
    assert 'loop:' in item.contents


def test_compile_command(tmp_path):
    source = unit_utils.find_file('testdata/asm/countdown.iasm')
    binary = tmp_path / 'out' / 'countdown.intcode'

    result = CliRunner().invoke(compile, [str(source), str(binary)])

    assert result.exit_code == 0
    assert load_file(binary) == [3, 12, 4, 12, 1001, 12, -1, 12, 1005, 12, 2, 99, 0]
