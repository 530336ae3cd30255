from pathlib import Path

import intcode.sasm.loader as loader
from intcode.runtime.machine import Machine


def find_file(filename: str) -> Path:
    return Path(__file__).parent / filename


def load_file(filename: str) -> str:
    return find_file(filename).read_text()


def load_program(name: str, padding: int = 0) -> list[int]:
    return loader.load_file(find_file(f'testdata/programs/{name}.intcode'), padding)


def run_program(words: list[int], inputs: list[int] | None = None, **kwargs) -> tuple[Machine, list[int]]:
    machine = Machine(words, **kwargs)
    machine.register_inputs(inputs or [])
    outputs = machine.run()
    return (machine, outputs)
