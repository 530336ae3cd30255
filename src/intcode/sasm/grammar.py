# type: ignore
''' Mnemonic grammar '''

import pyparsing as pp

import intcode.common.ops as ops
from intcode.sasm.fpp import FPP


def g_cmd(literal, op):
    return pp.Keyword(literal).setParseAction(lambda _: (FPP.issue_op, op))


id = pp.Word(pp.alphas + '_', pp.alphanums + '_')
comment = pp.Suppress(pp.Literal('//') + pp.restOfLine)

label = (id + pp.Suppress(':')).setParseAction(lambda r: (FPP.on_label, r))

s_const = pp.Regex('[+-]?[0-9]+')
nsname = pp.Word(pp.alphas + '_', pp.alphanums + '_.')
ref = pp.Combine('&' + pp.Optional(nsname + '::') + id)
value = s_const ^ ref

mode_prefix = pp.oneOf('# ~')
operand = (pp.Optional(mode_prefix) + value).setParseAction(lambda r: (FPP.issue_operand, r))


def g_cmd_n(literal, op):
    cmd = g_cmd(literal, op)

    for _ in range(ops.OPERANDS[op]):
        cmd = cmd + operand

    return cmd


add_cmd = g_cmd_n(ops.MNEMONICS[ops.ADD], ops.ADD)
mul_cmd = g_cmd_n(ops.MNEMONICS[ops.MUL], ops.MUL)
inp_cmd = g_cmd_n(ops.MNEMONICS[ops.INP], ops.INP)
out_cmd = g_cmd_n(ops.MNEMONICS[ops.OUT], ops.OUT)
jit_cmd = g_cmd_n(ops.MNEMONICS[ops.JIT], ops.JIT)
jif_cmd = g_cmd_n(ops.MNEMONICS[ops.JIF], ops.JIF)
lth_cmd = g_cmd_n(ops.MNEMONICS[ops.LTH], ops.LTH)
eql_cmd = g_cmd_n(ops.MNEMONICS[ops.EQL], ops.EQL)
arb_cmd = g_cmd_n(ops.MNEMONICS[ops.ARB], ops.ARB)
hlt_cmd = g_cmd_n(ops.MNEMONICS[ops.HLT], ops.HLT)

# Raw words
data_cmd = (pp.Suppress('.data') + pp.OneOrMore(value)).setParseAction(
    lambda r: (FPP.issue_data, list(r))
)

asm_cmd = add_cmd \
    | mul_cmd \
    | inp_cmd \
    | out_cmd \
    | jit_cmd \
    | jif_cmd \
    | lth_cmd \
    | eql_cmd \
    | arb_cmd \
    | hlt_cmd \
    | data_cmd

# Fail on unknown command
unknown = pp.Regex('.+').setParseAction(lambda r: (FPP.on_fail, r))

program = pp.ZeroOrMore(comment | label | asm_cmd | unknown) + pp.StringEnd()
