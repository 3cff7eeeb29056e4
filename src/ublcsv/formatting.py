"""Formatação de apresentação aplicada ao projetar faturas em tabelas."""

from __future__ import annotations

import re
from datetime import datetime

TIMESTAMP_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d")
DISPLAY_FORMAT = "%d.%m.%Y %H:%M:%S"

# strptime aceita campos sem zeros à esquerda (2024-3-5); estes padrões não
_TIMESTAMP_SHAPES = {
    "%Y-%m-%d %H:%M:%S": re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}"),
    "%Y-%m-%d": re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}"),
}

UNIT_CODES = {
    "H87": "kom",
    "PCE": "kom",
    "KGM": "kg",
    "MTR": "m",
    "LTR": "l",
    "HUR": "sat",
    "DAY": "dan",
}

_ASCII_MAX = 0x7F
PLACEHOLDER = "?"


def format_number(text: str) -> str:
    """Vírgula decimal: cada ``.`` passa a ``,`` e nada mais muda."""

    return text.replace(".", ",")


def sanitize_ascii(text: str) -> str:
    """Manter o ASCII e reduzir cada sequência não-ASCII a um único ``?``."""

    out: list[str] = []
    in_run = False
    for char in text:
        if ord(char) <= _ASCII_MAX:
            out.append(char)
            in_run = False
        elif not in_run:
            out.append(PLACEHOLDER)
            in_run = True
    return "".join(out)


def format_timestamp(text: str) -> str | None:
    """Reformatar ``YYYY-MM-DD[ HH:MM:SS]`` como ``DD.MM.YYYY HH:MM:SS``.

    Devolve ``None`` quando o valor está vazio ou não segue nenhum formato.
    """

    value = text.strip()
    if not value:
        return None
    for fmt in TIMESTAMP_FORMATS:
        if not _TIMESTAMP_SHAPES[fmt].fullmatch(value):
            continue
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return parsed.strftime(DISPLAY_FORMAT)
    return None


def unit_label(code: str) -> str:
    return UNIT_CODES.get(code, code)


__all__ = [
    "UNIT_CODES",
    "format_number",
    "format_timestamp",
    "sanitize_ascii",
    "unit_label",
]
