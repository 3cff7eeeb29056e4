"""Pontos de entrada da linha de comandos do exportador UBL."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Sequence

from .commands import export, ledger

CommandCallable = Callable[[list[str] | None], int | None]


@dataclass(frozen=True)
class CommandSpec:
    """Metadados de um comando exposto por :mod:`ublcsv.cli`."""

    name: str
    summary: str
    handler: CommandCallable
    module: str

    def run(self, argv: list[str] | None) -> int:
        """Executar o comando e normalizar o código de saída."""

        try:
            result = self.handler(argv)
        except SystemExit as exc:  # --help e erros de utilização
            code = exc.code
            if code is None:
                return 0
            if isinstance(code, int):
                return code
            print(str(code), file=sys.stderr)
            return 1
        if result is None:
            return 0
        return int(result)


_COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        name="export",
        summary="Export UBL invoices into invoice, party and line tables.",
        handler=export.main,
        module="ublcsv.commands.export",
    ),
    CommandSpec(
        name="ledger",
        summary="List the entries read from a ledger file.",
        handler=ledger.main,
        module="ublcsv.commands.ledger",
    ),
)

_COMMAND_INDEX: Mapping[str, CommandSpec] = {entry.name: entry for entry in _COMMANDS}


def available_commands() -> Iterable[CommandSpec]:
    """Devolver os comandos registados na CLI."""

    return _COMMANDS


def build_parser() -> argparse.ArgumentParser:
    """Devolver o parser de argumentos base partilhado pelos comandos."""

    parser = argparse.ArgumentParser(prog="ublcsv", description="UBL invoice table exporter")
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    for entry in _COMMANDS:
        subparsers.add_parser(entry.name, help=entry.summary, description=entry.summary)

    return parser


def run(command: str, argv: Sequence[str] | None = None) -> int:
    """Executar *command* reencaminhando ``argv`` para o respetivo handler."""

    entry = _COMMAND_INDEX.get(command)
    if entry is None:
        raise ValueError(f"Unknown command: {command}")
    return entry.run(list(argv or []))


def main(argv: Sequence[str] | None = None) -> int:
    """Executar a interface de linha de comandos."""

    args = list(sys.argv[1:] if argv is None else argv)
    if not args or args[0] not in _COMMAND_INDEX:
        # utilização, --help e comandos desconhecidos ficam a cargo do argparse
        try:
            build_parser().parse_args(args[:1])
        except SystemExit as exc:
            return exc.code if isinstance(exc.code, int) else 1
        return 2

    return run(args[0], args[1:])


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
