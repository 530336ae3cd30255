import logging as lg

from intcode.common.conf import NEWLINE, ASCII_LIMIT
from intcode.runtime.machine import Machine


class AsciiSession:
    ''' Line-oriented text conversation with a machine '''

    def __init__(self, machine: Machine):
        self.machine = machine

    def send_line(self, text: str):
        lg.debug(f'> {text}')
        self.machine.register_inputs(ord(ch) for ch in text)
        self.machine.register_input(NEWLINE)

    def send_lines(self, lines: list[str]):
        for line in lines:
            self.send_line(line)

    def read(self) -> tuple[str, list[int]]:
        ''' Runs until the machine wants input or halts '''
        chars = []
        extra = []

        for value in self.machine.run():
            if 0 <= value < ASCII_LIMIT:
                chars.append(chr(value))
            else:
                extra.append(value)

        return (''.join(chars), extra)

    @property
    def finished(self) -> bool:
        return self.machine.halted
