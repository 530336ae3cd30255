# type: ignore
import pytest

import unit_utils
from intcode.runtime.machine import Machine


@pytest.fixture
def sum2_program():
    yield unit_utils.load_program('sum2')


@pytest.fixture
def echo_machine():
    yield Machine(unit_utils.load_program('echo'))


@pytest.fixture
def nat_node_program():
    yield unit_utils.load_program('nat_node')


@pytest.fixture
def nat_poller_program():
    yield unit_utils.load_program('nat_poller')
