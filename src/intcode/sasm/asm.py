import logging as lg

import pyparsing as pp

from intcode.sasm.fpp import FPP, AssemblyError
import intcode.sasm.grammar as grammar


class CompilationItem:
    package: str | None = None
    modulename: str
    contents: str

    def namespace(self) -> str:
        if self.package is None:
            return f'{self.modulename}'

        return f'{self.package}.{self.modulename}'

    def set_package(self, package: str):
        self.package = package
        return self


def make_item(modulename: str, contents: str) -> CompilationItem:
    item = CompilationItem()
    item.modulename = modulename
    item.contents = contents
    return item


def compile_items(compile_items: list[CompilationItem]) -> list[int]:
    # First pass
    first_pass = FPP()

    for compile_item in compile_items:
        lg.info("Processing {0}".format(compile_item.namespace()))
        first_pass.namespace = compile_item.namespace()

        try:
            actions = grammar.program.parse_string(compile_item.contents)
        except pp.ParseException as e:
            raise AssemblyError(f'{compile_item.namespace()}: {e}') from e

        for (func, arg) in actions:  # type: ignore
            func(first_pass, arg)

    # Second pass
    words: list[int] = []

    for (t, d) in first_pass.cmd_list:
        if t == 'word':
            words.append(int(d))

        if t == 'ref':
            if d not in first_pass.label_dict:
                raise AssemblyError(f'Unknown label {d}')

            words.append(first_pass.label_dict[str(d)])

    return words


def compile_string(contents: str, modulename: str = 'main') -> list[int]:
    return compile_items([make_item(modulename, contents)])
