"""Normalized menu entities.

Every strategy produces the same shape, whatever the backend returned, so a
consumer can rebuild the menu tree by grouping entities on
``attributes.parent``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class MenuLink:
    uri: str


@dataclass
class MenuItemAttributes:
    """Attributes common to all normalized menu items."""

    title: str
    menu_name: str
    link: MenuLink
    parent: Optional[str] = None  # id of the parent entity, None for roots
    weight: Any = 0  # numeric, or a dot-path string for linkset menus
    description: Optional[str] = None


@dataclass
class MenuEntity:
    """A single normalized menu item."""

    id: str
    attributes: MenuItemAttributes
    resource: Optional[dict] = None  # raw backend record, when there is one

    @property
    def is_root(self) -> bool:
        return self.attributes.parent is None

    def to_dict(self) -> dict:
        attrs = self.attributes
        data: dict[str, Any] = {
            "id": self.id,
            "attributes": {
                "description": attrs.description,
                "link": {"uri": attrs.link.uri},
                "menu_name": attrs.menu_name,
                "parent": attrs.parent,
                "title": attrs.title,
                "weight": attrs.weight,
            },
        }
        if self.resource is not None:
            data["resource"] = self.resource
        return data


@dataclass
class MenuResult:
    """Result of a single menu retrieval."""

    entities: list[MenuEntity] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"entities": [e.to_dict() for e in self.entities]}
