"""Localizar documentos de fatura nas pastas de entrada configuradas."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator

from .errors import DiscoveryError

XML_SUFFIX = ".xml"


def _walk(directory: Path) -> Iterator[Path]:
    try:
        entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
    except OSError as exc:
        raise DiscoveryError(f"Cannot list {directory}: {exc}") from exc
    for entry in entries:
        path = Path(entry.path)
        if entry.is_dir():
            yield from _walk(path)
        elif path.suffix.lower() == XML_SUFFIX:
            yield path


def iter_xml_files(roots: Iterable[Path]) -> Iterator[Path]:
    """Produzir os ``*.xml`` em profundidade, por ordem lexical em cada pasta.

    As raízes são visitadas pela ordem indicada e podem ser um único ficheiro.
    """

    for root in roots:
        root = Path(root)
        if root.is_file():
            if root.suffix.lower() == XML_SUFFIX:
                yield root
            continue
        if not root.is_dir():
            raise DiscoveryError(f"Input location does not exist: {root}")
        yield from _walk(root)


__all__ = ["XML_SUFFIX", "iter_xml_files"]
