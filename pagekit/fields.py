"""
Pagekit: Editable Field Registry

An in-memory reflection of one rendered page: which regions are editable
and what text each currently displays. A region is an element carrying a
`contenteditable` attribute whose parent carries the region id:

    <div id="title" class="field"><h1 contenteditable="false">My Site</h1></div>

The registry is built once per render pass from the document itself and
handed explicitly to capture; nothing is looked up ambiently.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

EDITABLE_SELECTOR = "[id] > [contenteditable]"


class EditModeInactive(Exception):
    """A region was written to while the page was not in edit mode."""
    pass


def inner_text(element: Tag) -> str:
    """Displayed text of an element. <br> reads as a newline."""
    parts: list[str] = []
    for node in element.descendants:
        if isinstance(node, Tag):
            if node.name == "br":
                parts.append("\n")
        elif isinstance(node, NavigableString) and not isinstance(node, Comment):
            parts.append(str(node))
    return "".join(parts)


def select_regions(root: Tag, *, editable_only: bool = False) -> list[tuple[str, Tag]]:
    """(region id, editable element) pairs under `root`, in document order."""
    selector = "[id] > [contenteditable=true]" if editable_only else EDITABLE_SELECTOR
    return [(el.parent["id"], el) for el in root.select(selector)]


class FieldRegistry:
    """Editable regions of a rendered page, keyed by region id."""

    def __init__(self, soup: BeautifulSoup, container_id: str = "content") -> None:
        self.soup = soup
        self.container_id = container_id
        container = soup.find(id=container_id)
        self._container: Tag | None = container if isinstance(container, Tag) else None
        self._regions: dict[str, Tag] = {}
        if self._container is not None:
            for region_id, element in select_regions(self._container):
                self._regions[region_id] = element
        self._edit_mode = any(el.get("contenteditable") == "true" for el in self._regions.values())

    @classmethod
    def from_html(cls, html: str, container_id: str = "content") -> FieldRegistry:
        return cls(BeautifulSoup(html, "html.parser"), container_id=container_id)

    @property
    def container(self) -> Tag | None:
        return self._container

    @property
    def ids(self) -> list[str]:
        return list(self._regions)

    @property
    def edit_mode(self) -> bool:
        return self._edit_mode

    def set_edit_mode(self, active: bool) -> None:
        """Flip every region between read-only and editable. Content is untouched."""
        value = "true" if active else "false"
        for element in self._regions.values():
            element["contenteditable"] = value
        self._edit_mode = active

    def text(self, region_id: str) -> str:
        return inner_text(self._regions[region_id])

    def set_text(self, region_id: str, text: str) -> None:
        """Replace a region's content with plain text, as an operator typing would."""
        if not self._edit_mode:
            raise EditModeInactive(f"Cannot edit {region_id!r}: edit mode is off")
        element = self._regions[region_id]
        element.clear()
        for i, line in enumerate(text.split("\n")):
            if i:
                element.append(self.soup.new_tag("br"))
            if line:
                element.append(NavigableString(line))

    def as_mapping(self) -> dict[str, str]:
        return {region_id: inner_text(el) for region_id, el in self._regions.items()}

    def to_html(self) -> str:
        return str(self.soup)
