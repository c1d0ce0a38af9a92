"""Queryable HTML tree used by every extractor.

Extractors only depend on the :class:`Node` / :class:`Document` protocols,
so they can be exercised against a hand-built fake tree as well as the
BeautifulSoup-backed implementation below.
"""

from __future__ import annotations

import copy
import logging
from typing import Iterable, Protocol

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

logger = logging.getLogger(__name__)


class Node(Protocol):
    """An element that supports CSS-selector traversal."""

    @property
    def tag(self) -> str: ...

    def select(self, selector: str) -> list[Node]: ...

    def text(self) -> str: ...

    def attr(self, name: str) -> str | None: ...

    def closest(self, selector: str) -> Node | None: ...

    def parent(self) -> Node | None: ...


class Document(Node, Protocol):
    """The root of a parsed page."""

    def select_one(self, selector: str) -> Node | None: ...

    def first_attr(self, selector: str, name: str) -> str | None: ...

    def first_text(self, selector: str) -> str: ...

    def text_without(self, selector: str, excluded: Iterable[str]) -> str: ...


class HtmlElement:
    """:class:`Node` backed by a BeautifulSoup tag."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def __repr__(self) -> str:
        return f"<HtmlElement {self._tag.name}>"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, HtmlElement) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    @property
    def tag(self) -> str:
        return (self._tag.name or "").lower()

    def select(self, selector: str) -> list[HtmlElement]:
        try:
            return [HtmlElement(t) for t in self._tag.select(selector)]
        except SelectorSyntaxError:
            logger.debug("invalid selector ignored", extra={"selector": selector})
            return []

    def text(self) -> str:
        return self._tag.get_text()

    def attr(self, name: str) -> str | None:
        value = self._tag.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return value

    def closest(self, selector: str) -> HtmlElement | None:
        try:
            found = self._tag.css.closest(selector)
        except SelectorSyntaxError:
            logger.debug("invalid selector ignored", extra={"selector": selector})
            return None
        return HtmlElement(found) if found is not None else None

    def parent(self) -> HtmlElement | None:
        parent = self._tag.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return HtmlElement(parent)


class HtmlDocument(HtmlElement):
    """:class:`Document` for a whole page."""

    __slots__ = ()

    @classmethod
    def parse(cls, html: str) -> HtmlDocument:
        # Keep ``class`` as the raw attribute string so pattern checks see
        # exactly what the page declared.
        soup = BeautifulSoup(html, "lxml", multi_valued_attributes=None)
        return cls(soup)

    def select_one(self, selector: str) -> HtmlElement | None:
        found = self.select(selector)
        return found[0] if found else None

    def first_attr(self, selector: str, name: str) -> str | None:
        element = self.select_one(selector)
        return element.attr(name) if element is not None else None

    def first_text(self, selector: str) -> str:
        element = self.select_one(selector)
        return element.text() if element is not None else ""

    def text_without(self, selector: str, excluded: Iterable[str]) -> str:
        """Text of the first *selector* match with *excluded* subtrees dropped.

        Works on a copy; the parsed tree is left untouched.
        """
        element = self.select_one(selector)
        if element is None:
            return ""
        clone = copy.copy(element._tag)
        combined = ", ".join(excluded)
        if combined:
            try:
                for tag in clone.select(combined):
                    tag.extract()
            except SelectorSyntaxError:
                logger.debug("invalid selector ignored", extra={"selector": combined})
        return clone.get_text()
