''' Program text: comma separated signed decimals '''

from pathlib import Path
import logging as lg

import pyparsing as pp


class LoadError(Exception):
    pass


number = pp.Regex('[+-]?[0-9]+').setParseAction(lambda r: int(r[0]))
program = pp.Optional(pp.delimitedList(number)) + pp.StringEnd()


def load_program(text: str, padding: int = 0) -> list[int]:
    try:
        words = program.parse_string(text.strip()).as_list()
    except pp.ParseException as e:
        raise LoadError(f'Malformed program at column {e.col}: {e.line!r}') from e

    lg.debug(f'Loaded {len(words)} words, padding {padding}')
    return words + [0] * padding


def load_file(filepath: str | Path, padding: int = 0) -> list[int]:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Loading program {filepath}')
    return load_program(filepath.read_text(), padding)


def dump_program(words: list[int]) -> str:
    return ','.join(str(w) for w in words)
