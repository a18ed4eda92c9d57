"""
Pagekit: Edit Capture

Pure function: (rendered page) → list[FieldEdit]
No IO. Reads back every region that is currently editable inside the
content container. Outside edit mode nothing is editable, so nothing is
captured.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from pagekit.fields import FieldRegistry, inner_text, select_regions
from pagekit.types import FieldEdit


def capture(source: FieldRegistry | str, container_id: str = "content") -> list[FieldEdit]:
    """
    Capture one FieldEdit per editable region, in document order.

    `source` is a FieldRegistry or an HTML string. Consumers treat the
    result as a set keyed by id; duplicate region ids are a template error
    and are not checked here.
    """
    if isinstance(source, FieldRegistry):
        container = source.container
    else:
        found = BeautifulSoup(source, "html.parser").find(id=container_id)
        container = found if isinstance(found, Tag) else None

    if container is None:
        return []

    return [
        FieldEdit(id=region_id, text=inner_text(element))
        for region_id, element in select_regions(container, editable_only=True)
    ]
