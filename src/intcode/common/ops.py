from enum import Enum, IntEnum

# Opcodes
ADD = 1  # A1 +  A2 -> D3
MUL = 2  # A1 *  A2 -> D3
INP = 3  # input -> D1
OUT = 4  # A1 -> output
JIT = 5  # if A1 .ne 0 jmp A2
JIF = 6  # if A1 .eq 0 jmp A2
LTH = 7  # A1 .lt A2 -> D3
EQL = 8  # A1 .eq A2 -> D3
ARB = 9  # base + A1 -> base
HLT = 99

# Operand count per opcode
OPERANDS = {
    ADD: 3,
    MUL: 3,
    INP: 1,
    OUT: 1,
    JIT: 2,
    JIF: 2,
    LTH: 3,
    EQL: 3,
    ARB: 1,
    HLT: 0
}

# Operands resolved as write addresses
WRITES = {
    ADD: 2,
    MUL: 2,
    INP: 0,
    LTH: 2,
    EQL: 2
}

MNEMONICS = {
    ADD: 'add',
    MUL: 'mul',
    INP: 'in',
    OUT: 'out',
    JIT: 'jt',
    JIF: 'jf',
    LTH: 'lt',
    EQL: 'eq',
    ARB: 'arb',
    HLT: 'hlt'
}


class Mode(IntEnum):
    POSITION = 0
    IMMEDIATE = 1
    RELATIVE = 2


class Dialect(Enum):
    BASIC = 'basic'
    WITH_IO = 'with-io'
    WITH_RELATIVE = 'with-relative'


DIALECT_OPS = {
    Dialect.BASIC: {ADD, MUL, HLT},
    Dialect.WITH_IO: {ADD, MUL, INP, OUT, JIT, JIF, LTH, EQL, HLT},
    Dialect.WITH_RELATIVE: set(OPERANDS.keys())
}

DIALECT_MODES = {
    Dialect.BASIC: {Mode.POSITION, Mode.IMMEDIATE},
    Dialect.WITH_IO: {Mode.POSITION, Mode.IMMEDIATE},
    Dialect.WITH_RELATIVE: {Mode.POSITION, Mode.IMMEDIATE, Mode.RELATIVE}
}

# Only the full dialect extends memory on demand
DIALECT_GROWS = {
    Dialect.BASIC: False,
    Dialect.WITH_IO: False,
    Dialect.WITH_RELATIVE: True
}


def split_word(word: int) -> tuple[int, list[int]]:
    ''' Opcode word -> (code, [mode digits for operands 1..3]) '''
    code = word % 100
    digits = [(word // 100) % 10, (word // 1000) % 10, (word // 10000) % 10]
    return (code, digits)


def make_word(code: int, modes: list[int]) -> int:
    word = code
    for i, mode in enumerate(modes):
        word += int(mode) * 10 ** (i + 2)

    return word
