import pytest

from intcode.sasm.loader import load_program, load_file, dump_program, LoadError

import unit_utils


def test_load_program():
    assert load_program('1,9,10,3,2,3,11,0,99,30,40,50\n') == [1, 9, 10, 3, 2, 3, 11, 0, 99, 30, 40, 50]


def test_signs_and_whitespace():
    assert load_program(' 109, -1,\n+204 ,0 ') == [109, -1, 204, 0]


def test_padding():
    assert load_program('99', padding=3) == [99, 0, 0, 0]


def test_empty():
    assert load_program('') == []


@pytest.mark.parametrize('text', ['1,,2', '1,x', '1 2', '1,2,'])
def test_malformed(text):
    with pytest.raises(LoadError):
        load_program(text)


def test_load_file():
    words = load_file(unit_utils.find_file('testdata/programs/echo.intcode'))
    assert words == [3, 20, 1006, 20, 10, 4, 20, 1105, 1, 0, 99]


def test_dump_program():
    assert dump_program([1, -2, 99]) == '1,-2,99'
