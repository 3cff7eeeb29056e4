"""Pesquisa de elementos independente do *namespace*, partilhada pelo parser."""

from __future__ import annotations

from typing import Iterator

from lxml import etree


def localname(element: etree._Element) -> str:
    tag = element.tag
    if not isinstance(tag, str):
        # comentários e instruções de processamento
        return ""
    return etree.QName(tag).localname


def iter_children(element: etree._Element, name: str) -> Iterator[etree._Element]:
    """Produzir os filhos diretos de ``element`` cujo nome local é ``name``."""

    for child in element:
        if localname(child) == name:
            yield child


def find_path(element: etree._Element, path: str) -> etree._Element | None:
    """Seguir um caminho de nomes locais separados por ``/`` (primeira ocorrência).

    Os documentos UBL usam os prefixos ``cac:``/``cbc:``, mas as amostras feitas
    à mão muitas vezes não têm *namespace*; por isso compara-se o nome local.
    """

    node: etree._Element | None = element
    for step in path.split("/"):
        if node is None:
            return None
        node = next(iter_children(node, step), None)
    return node


def find_text(element: etree._Element, path: str) -> str:
    """Devolver o texto de ``path`` sem espaços nas pontas, ou ``""``.

    Só contam os nós de texto diretos: comentários dentro de um valor são
    ignorados e o texto à volta mantém-se.
    """

    node = find_path(element, path)
    if node is None:
        return ""
    return "".join(node.xpath("text()")).strip()


def find_attribute(element: etree._Element, path: str, attribute: str) -> str:
    node = find_path(element, path)
    if node is None:
        return ""
    return (node.get(attribute) or "").strip()


__all__ = [
    "find_attribute",
    "find_path",
    "find_text",
    "iter_children",
    "localname",
]
