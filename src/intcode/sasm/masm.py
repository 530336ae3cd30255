from pathlib import Path
import logging as lg
from typing import Tuple

import click

from intcode.sasm.asm import CompilationItem, compile_items
from intcode.sasm.loader import dump_program


def collect_file(filepath: str | Path) -> CompilationItem:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Collecting file {filepath}')
    item = CompilationItem()
    item.contents = filepath.read_text()
    item.modulename = filepath.stem
    return item


def collect_files(filepaths: list[Path]) -> list[CompilationItem]:
    return [collect_file(path) for path in filepaths]


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('sources', nargs=-1, type=Path)
@click.argument('binary', type=Path)
def compile(verbose: bool, sources: Tuple[Path], binary: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("INTCODE ASM")

    items = collect_files(list(sources))
    words = compile_items(items)
    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_text(dump_program(words) + '\n')


if __name__ == "__main__":
    compile()
