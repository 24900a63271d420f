"""Immutable CST nodes with labeled, ordered children."""

from __future__ import annotations

from dataclasses import dataclass

from cstcalc.lexer import Token
from cstcalc.text import TextRange

type CstElement = CstNode | Token


@dataclass(frozen=True, slots=True)
class CstNode:
    """One rule activation.

    `entries` holds (label, elements) pairs in the order labels were first
    recorded. A label is present only if at least one element was recorded
    under it, so absence and presence never need a sentinel.
    """

    name: str
    entries: tuple[tuple[str, tuple[CstElement, ...]], ...]
    range: TextRange | None = None

    @property
    def children(self) -> dict[str, tuple[CstElement, ...]]:
        return dict(self.entries)

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(label for label, _ in self.entries)

    def has(self, label: str) -> bool:
        return any(existing == label for existing, _ in self.entries)

    def get(self, label: str) -> tuple[CstElement, ...]:
        for existing, elements in self.entries:
            if existing == label:
                return elements
        return ()

    def __getitem__(self, label: str) -> tuple[CstElement, ...]:
        elements = self.get(label)
        if not elements:
            raise KeyError(f"Node `{self.name}` has no children labeled `{label}`")
        return elements

    def tokens(self, label: str) -> tuple[Token, ...]:
        return tuple(element for element in self.get(label) if isinstance(element, Token))

    def nodes(self, label: str) -> tuple[CstNode, ...]:
        return tuple(element for element in self.get(label) if isinstance(element, CstNode))

    def descendant_tokens(self) -> list[Token]:
        """All tokens below this node, in source order."""
        tokens: list[Token] = []

        def walk(node: CstNode) -> None:
            for _, elements in node.entries:
                for element in elements:
                    if isinstance(element, CstNode):
                        walk(element)
                    else:
                        tokens.append(element)

        walk(self)
        return sorted(tokens, key=lambda token: token.range.start)


class CstNodeBuilder:
    """Collects one rule activation's children, then freezes them into a `CstNode`."""

    __slots__ = ("_name", "_children")

    def __init__(self, name: str) -> None:
        self._name = name
        self._children: dict[str, list[CstElement]] = {}

    @property
    def name(self) -> str:
        return self._name

    def add(self, label: str, element: CstElement) -> None:
        self._children.setdefault(label, []).append(element)

    def finish(self, *, track_location: bool = True) -> CstNode:
        entries = tuple((label, tuple(elements)) for label, elements in self._children.items())
        node_range = _cover(entries) if track_location else None
        return CstNode(name=self._name, entries=entries, range=node_range)


def _cover(entries: tuple[tuple[str, tuple[CstElement, ...]], ...]) -> TextRange | None:
    covered: TextRange | None = None
    for _, elements in entries:
        for element in elements:
            element_range = element.range
            if element_range is None:
                continue
            covered = element_range if covered is None else covered.cover(element_range)
    return covered


def dump_cst(node: CstNode) -> str:
    """Render a node as an indented, label-annotated tree."""
    lines: list[str] = []

    def walk_node(current: CstNode, label: str | None, depth: int) -> None:
        indent = "  " * depth
        prefix = f"{label}: " if label is not None else ""
        lines.append(f"{indent}{prefix}{current.name}")
        for child_label, elements in current.entries:
            for element in elements:
                if isinstance(element, CstNode):
                    walk_node(element, child_label, depth + 1)
                else:
                    lines.append(f"{indent}  {child_label}: {element.type.name} {element.image!r}")

    walk_node(node, None, 0)
    return "\n".join(lines)
