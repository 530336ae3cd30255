from pathlib import Path
import logging as lg

import click

import intcode.common.ops as ops
from intcode.common.ops import Mode
from intcode.sasm.loader import load_file

PREFIXES = {
    Mode.POSITION: '',
    Mode.IMMEDIATE: '#',
    Mode.RELATIVE: '~'
}


def decode_at(words: list[int], ip: int) -> tuple[str, int]:
    ''' Listing text and size of the instruction at ip, raw data if it does not decode '''
    word = words[ip]
    (code, digits) = ops.split_word(word)

    if word < 0 or code not in ops.OPERANDS:
        return (f'.data {word}', 1)

    count = ops.OPERANDS[code]

    if ip + count >= len(words):
        return (f'.data {word}', 1)

    operands = []

    for n, digit in enumerate(digits[:count]):
        if digit not in (Mode.POSITION, Mode.IMMEDIATE, Mode.RELATIVE):
            return (f'.data {word}', 1)

        operands.append(f'{PREFIXES[Mode(digit)]}{words[ip + 1 + n]}')

    return (' '.join([ops.MNEMONICS[code]] + operands), 1 + count)


def disassemble(words: list[int]) -> list[str]:
    listing = []
    ip = 0

    while ip < len(words):
        (text, size) = decode_at(words, ip)
        listing.append(f'{ip:05d}: {text}')
        ip += size

    return listing


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('program', type=Path)
def disasm(verbose: bool, program: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('INTCODE DISASM')

    for line in disassemble(load_file(program)):
        click.echo(line)


if __name__ == '__main__':
    disasm()
