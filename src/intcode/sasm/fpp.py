import logging as lg
from typing import List, Tuple, Dict, Any

import intcode.common.ops as ops
from intcode.common.ops import Mode

Tokens = List[Any]

MODE_PREFIXES = {
    '': Mode.POSITION,
    '#': Mode.IMMEDIATE,
    '~': Mode.RELATIVE
}


class AssemblyError(Exception):
    pass


class FPP:
    ''' First pass processor '''
    cmd_list: List[Tuple[str, int | str]]
    label_dict: Dict[str, int]

    def __init__(self):
        self.cmd_list = list()
        self.offset = 0
        self.namespace = "<global>"
        self.label_dict = dict()
        self.op_index: int | None = None    # Opcode word receiving mode digits
        self.op = ops.HLT
        self.operand_no = 0

    def get_qualified_name(self, name: str, namespace: str | None = None):
        if namespace is None:
            namespace = self.namespace

        qname = namespace + '::' + name
        return qname

    def resolve_name(self, refname: str):
        if '::' in refname:
            (namespace, name) = refname.split('::', 1)
            return self.get_qualified_name(name, namespace)

        return self.get_qualified_name(refname)

    # Handlers
    def issue_word(self, word: int):
        self.cmd_list.append(('word', word))
        self.offset += 1

    def issue_value(self, value: str):
        if value.startswith('&'):
            self.on_ref(value[1:])
        else:
            self.issue_word(int(value))

    def issue_op(self, op: int):
        lg.debug(f'Issuing command {ops.MNEMONICS[op]} @ {self.offset}')
        self.op_index = len(self.cmd_list)
        self.op = op
        self.operand_no = 0
        self.issue_word(op)

    def issue_operand(self, tokens: Tokens):
        if len(tokens) == 2:
            (prefix, value) = tokens
        else:
            (prefix, value) = ('', tokens[0])

        mode = MODE_PREFIXES[prefix]

        if mode == Mode.IMMEDIATE and ops.WRITES.get(self.op) == self.operand_no:
            raise AssemblyError(
                f'Immediate destination for {ops.MNEMONICS[self.op]} @ {self.offset}'
            )

        if self.op_index is None:
            raise AssemblyError(f'Operand without command @ {self.offset}')

        (kind, word) = self.cmd_list[self.op_index]
        self.cmd_list[self.op_index] = (kind, int(word) + mode * 10 ** (self.operand_no + 2))
        self.operand_no += 1

        self.issue_value(value)

    def issue_data(self, tokens: Tokens):
        for value in tokens:
            self.issue_value(value)

    def on_label(self, tokens: Tokens):
        labelname = tokens[0]
        qlabelname = self.get_qualified_name(labelname)

        if qlabelname in self.label_dict:
            raise AssemblyError(f'Label {qlabelname} redefined')

        self.label_dict[qlabelname] = self.offset
        lg.debug(f'Label {qlabelname} @ {self.offset}')

    def on_ref(self, refname: str):
        labelname = self.resolve_name(refname)

        lg.debug(f'Ref {labelname}')

        self.cmd_list.append(('ref', labelname))
        self.offset += 1  # placeholder-word

    def on_fail(self, rest: Tokens):
        raise AssemblyError(f'Unknown command {rest[0]}')
