import copy
import logging as lg
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Iterable, NoReturn, Sequence, cast

import intcode.common.ops as ops
from intcode.common.ops import Mode, Dialect
from intcode.common.conf import MachineSettings


class MachineError(Exception):
    ip: int
    word: int | None

    def __init__(self, message: str, ip: int, word: int | None = None):
        super().__init__(f'{message} (IP:{ip} OP:{word})')
        self.ip = ip
        self.word = word


class ConfigurationError(MachineError):
    pass


class IllegalOpcode(ConfigurationError):
    pass


class IllegalMode(ConfigurationError):
    pass


class ImmediateWrite(ConfigurationError):
    pass


class AddressOutOfBounds(ConfigurationError):
    pass


class ProtocolError(MachineError):
    pass


class Signal(Enum):
    CONTINUE = auto()
    BLOCKED = auto()
    HALTED = auto()


class Suspend(Enum):
    NONE = auto()
    OUTPUT = auto()
    BLOCKED = auto()
    HALTED = auto()


@dataclass(frozen=True)
class Instruction:
    ip: int
    word: int
    code: int
    modes: tuple[Mode, ...]

    @property
    def size(self) -> int:
        return 1 + len(self.modes)


class Machine:
    memory: list[int]
    ip: int     # Instruction pointer
    base: int   # Relative base
    inputs: deque[int]
    outputs: deque[int]
    state: Suspend

    def __init__(
        self,
        memory: Sequence[int],
        dialect: Dialect | None = None,
        settings: MachineSettings | None = None,
        padding: int | None = None
    ):
        if settings is None:
            settings = MachineSettings()

        if dialect is None:
            dialect = settings.dialect

        if padding is None:
            padding = settings.padding

        self.settings = settings
        self.dialect = dialect
        self.grows = settings.grow_memory

        if self.grows is None:
            self.grows = ops.DIALECT_GROWS[dialect]

        self.memory = list(memory) + [0] * padding    # Own copy, never shared

        self.ip = 0
        self.base = 0
        self.inputs = deque()
        self.outputs = deque()
        self.state = Suspend.NONE

        self.instr: Instruction | None = None     # Being executed
        self.pending: Instruction | None = None   # Input waiting for a value
        self.jumped = False

    # - Helpers - #

    def debug_dump(self):
        state = [f'{k}:{v}' for k, v in {
            'IP': self.ip,
            'BASE': self.base,
            'STATE': self.state.name,
            'IN': len(self.inputs),
            'OUT': len(self.outputs)
        }.items()]

        lg.debug(' '.join(state))

    def fail(self, error: type[MachineError], message: str) -> NoReturn:
        word = self.instr.word if self.instr is not None else None
        raise error(message, self.ip, word)

    def read(self, address: int) -> int:
        if address < 0:
            self.fail(AddressOutOfBounds, f'Read from negative address {address}')

        if address >= len(self.memory):
            if not self.grows:
                self.fail(AddressOutOfBounds, f'Read beyond memory at {address}')

            return 0

        return self.memory[address]

    def write(self, address: int, value: int):
        if address < 0:
            self.fail(AddressOutOfBounds, f'Write to negative address {address}')

        if address >= len(self.memory):
            if not self.grows:
                self.fail(AddressOutOfBounds, f'Write beyond memory at {address}')

            self.memory.extend([0] * (address + 1 - len(self.memory)))

        self.memory[address] = value

    @property
    def current(self) -> Instruction:
        return cast(Instruction, self.instr)    # Set by step before any handler runs

    def raw(self, n: int) -> int:
        return self.read(self.current.ip + 1 + n)

    def address(self, n: int) -> int:
        mode = self.current.modes[n]

        if mode == Mode.IMMEDIATE:
            self.fail(ImmediateWrite, f'Immediate operand {n + 1} used as destination')

        if mode == Mode.RELATIVE:
            return self.base + self.raw(n)

        return self.raw(n)

    def value(self, n: int) -> int:
        if self.current.modes[n] == Mode.IMMEDIATE:
            return self.raw(n)

        return self.read(self.address(n))

    def arithm_pair(self, op: Callable[[int, int], int]):
        a = self.value(0)
        b = self.value(1)
        self.write(self.address(2), op(a, b))

    def jump_if(self, cond: Callable[[int], bool]):
        if cond(self.value(0)):
            self.ip = self.value(1)
            self.jumped = True

    def decode(self) -> Instruction:
        self.instr = None
        word = self.read(self.ip)
        (code, digits) = ops.split_word(word)

        if word < 0 or code not in ops.DIALECT_OPS[self.dialect]:
            raise IllegalOpcode(f'Illegal opcode {code}', self.ip, word)

        modes = []

        for digit in digits[:ops.OPERANDS[code]]:
            try:
                mode = Mode(digit)
            except ValueError:
                raise IllegalMode(f'Unknown addressing mode {digit}', self.ip, word)

            if mode not in ops.DIALECT_MODES[self.dialect]:
                raise IllegalMode(f'Mode {mode.name} not in {self.dialect.value}', self.ip, word)

            modes.append(mode)

        return Instruction(self.ip, word, code, tuple(modes))

    # - Operations - #

    def add(self):
        self.arithm_pair(lambda a, b: a + b)

    def mul(self):
        self.arithm_pair(lambda a, b: a * b)

    def inp(self):
        if not self.inputs:
            return Signal.BLOCKED

        self.write(self.address(0), self.inputs.popleft())

    def out(self):
        self.outputs.append(self.value(0))

    def jit(self):
        self.jump_if(lambda a: a != 0)

    def jif(self):
        self.jump_if(lambda a: a == 0)

    def lth(self):
        self.arithm_pair(lambda a, b: 1 if a < b else 0)

    def eql(self):
        self.arithm_pair(lambda a, b: 1 if a == b else 0)

    def arb(self):
        self.base += self.value(0)

    def hlt(self):
        return Signal.HALTED

    HANDLERS = {
        ops.ADD: add,
        ops.MUL: mul,
        ops.INP: inp,
        ops.OUT: out,
        ops.JIT: jit,
        ops.JIF: jif,
        ops.LTH: lth,
        ops.EQL: eql,
        ops.ARB: arb,
        ops.HLT: hlt
    }

    # -- Implementation -- #

    @property
    def halted(self) -> bool:
        return self.state == Suspend.HALTED

    @property
    def blocked(self) -> bool:
        return self.state == Suspend.BLOCKED

    @property
    def last_suspend(self) -> Suspend:
        return self.state

    def register_input(self, value: int):
        self.inputs.append(value)

    def register_inputs(self, values: Iterable[int]):
        self.inputs.extend(values)

    def peek_memory(self, address: int) -> int:
        return self.read(address)

    def snapshot_memory(self) -> list[int]:
        return list(self.memory)

    def fork(self) -> 'Machine':
        return copy.deepcopy(self)

    def step(self) -> Signal:
        if self.state == Suspend.HALTED:
            raise ProtocolError('Step after halt', self.ip)

        if self.pending is not None:
            # Resume the Input decoded before blocking
            self.instr = self.pending
            self.pending = None
        else:
            self.instr = self.decode()

        self.jumped = False
        handler = self.HANDLERS[self.instr.code]
        signal = handler(self)

        if signal == Signal.BLOCKED:
            self.pending = self.instr
            self.state = Suspend.BLOCKED
        elif signal == Signal.HALTED:
            self.state = Suspend.HALTED
        else:
            signal = Signal.CONTINUE
            self.state = Suspend.NONE

            if not self.jumped:
                self.ip += self.instr.size

        if self.settings.trace:
            self.debug_dump()

        return signal

    def run_until_output(self) -> int | None:
        while not self.outputs:
            signal = self.step()

            if signal != Signal.CONTINUE:
                return None

        self.state = Suspend.OUTPUT
        return self.outputs.popleft()

    def run(self) -> list[int]:
        ''' Runs until blocked or halted, returns every output produced '''
        produced = []
        value = self.run_until_output()

        while value is not None:
            produced.append(value)
            value = self.run_until_output()

        return produced
