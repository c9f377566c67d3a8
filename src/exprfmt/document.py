"""Tagged document produced by the markup renderer.

A Document is one of:
- ``str``: a literal text fragment
- ``Tagged``: a unit labelled with a tag path from the taxonomy
- ``Run``: an ordered, untagged grouping

Documents are immutable and carry no layout of their own: line breaks and
indentation are ordinary text fragments.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Tagged:
    tag: str
    children: tuple[Document, ...]


@dataclass(frozen=True, slots=True)
class Run:
    children: tuple[Document, ...]


type Document = str | Tagged | Run


def tagged(tag: str, *children: Document) -> Tagged:
    return Tagged(tag, children)


def run(*children: Document) -> Run:
    return Run(children)


def interpose(separator: tuple[Document, ...], items: Iterable[Document]) -> list[Document]:
    """Place the separator fragments between consecutive items.

    Example:
        >>> interpose((",", " "), ["a", "b"])
        ['a', ',', ' ', 'b']
    """
    out: list[Document] = []
    for i, item in enumerate(items):
        if i:
            out.extend(separator)
        out.append(item)
    return out


__all__ = ["Document", "Run", "Tagged", "interpose", "run", "tagged"]
