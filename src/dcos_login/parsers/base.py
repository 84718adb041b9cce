"""Selector-based extraction from HTML documents."""

from typing import Iterator, Literal

import httpx
from bs4 import BeautifulSoup, Tag


class Document:
    """A parsed HTML page with lookups by CSS selector.

    Lookups never mutate the tree, so repeated calls give identical results.
    Absence is reported as None; callers decide whether it is fatal.
    """

    def __init__(self, html: str):
        self.soup = BeautifulSoup(html, "lxml")

    @classmethod
    def from_response(cls, response: httpx.Response) -> "Document":
        return cls(response.text)

    def count(self, selector: str) -> int:
        return len(self.soup.select(selector))

    def find_attribute(self, selector: str, name: str) -> str | None:
        """Return an attribute of the first element matching selector.

        Args:
            selector: CSS selector
            name: Attribute name

        Returns:
            Attribute value, or None if no element matches or it lacks the attribute
        """
        element = self.soup.select_one(selector)
        if element is None:
            return None
        value = element.get(name)
        if value is None:
            return None
        # Multi-valued attributes (class, rel) come back as lists
        if isinstance(value, list):
            return " ".join(value)
        return value

    def find_text(self, selector: str, occurrence: Literal["first", "last"] = "last") -> str | None:
        """Return the text of the first or last element matching selector.

        Defaults to the last match: pages embed several script blocks and the
        interesting one comes last.
        """
        elements = self.soup.select(selector)
        if not elements:
            return None
        if occurrence == "first":
            element = elements[0]
        elif occurrence == "last":
            element = elements[-1]
        else:
            raise ValueError(f"occurrence must be 'first' or 'last', not {occurrence!r}")
        return _text_of(element)

    def iter_form_fields(self, selector: str) -> Iterator[tuple[str, str]]:
        """Yield (name, value) for every input of the matched form(s), in document order.

        Inputs without a name are skipped, as a browser would on submit.
        """
        for form in self.soup.select(selector):
            for inp in form.find_all("input"):
                name = inp.get("name")
                if not name:
                    continue
                yield name, inp.get("value", "")


def _text_of(element: Tag) -> str:
    # Script bodies are a single string child, get_text() may skip them
    if element.string is not None:
        return str(element.string)
    return element.get_text()
