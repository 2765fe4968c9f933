"""Declarative structural selectors.

A ``Selector`` is an ordered list of ``Step`` objects. Each step matches an
element by tag, id, classes and attribute values, and is either a descendant
(default) or a direct child of the element matched by the previous step.
Selectors render to CSS and run through BeautifulSoup's ``select``, so the
extraction rules read as data:

    PRODUCT_LINK = Selector.of(
        Step("strong", classes=("product", "name")),
        Step("a", classes=("product-item-link",)),
    )
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from bs4.element import Tag

__all__ = [
    "Step",
    "Selector",
    "get_attr",
    "get_text",
]


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


@dataclass(frozen=True)
class Step:
    tag: str = "*"
    id: Optional[str] = None
    classes: Tuple[str, ...] = ()
    attrs: Tuple[Tuple[str, str], ...] = ()
    child: bool = False

    def css(self) -> str:
        out = self.tag
        if self.id:
            out += f"#{self.id}"
        # Class order is irrelevant and duplicates add nothing
        for cls in dict.fromkeys(self.classes):
            out += f".{cls}"
        for name, value in self.attrs:
            out += f"[{name}={_quote(value)}]"
        return out


@dataclass(frozen=True)
class Selector:
    steps: Tuple[Step, ...]

    @classmethod
    def of(cls, *steps: Step) -> "Selector":
        if not steps:
            raise ValueError("A selector needs at least one step")
        return cls(tuple(steps))

    def css(self) -> str:
        parts: List[str] = []
        for i, step in enumerate(self.steps):
            if step.child and i > 0:
                parts.append(">")
            parts.append(step.css())
        return " ".join(parts)

    def find_all(self, root: Tag) -> List[Tag]:
        """All matching elements below ``root``, in document order."""
        return root.select(self.css())

    def first(self, root: Tag) -> Optional[Tag]:
        """The first matching element below ``root``, or None if nothing matches."""
        return root.select_one(self.css())


def get_attr(element: Optional[Tag], name: str) -> Optional[str]:
    """Attribute value of an element.

    Returns None when the element or the attribute is missing, and the value
    (possibly empty) when it is present. Multi-valued attributes are joined.
    """
    if element is None:
        return None
    value = element.get(name)
    if isinstance(value, list):
        return " ".join(value)
    return value


def get_text(element: Optional[Tag]) -> Optional[str]:
    """Whitespace-normalized text of an element, or None if there is no element."""
    if element is None:
        return None
    return " ".join(element.stripped_strings)
