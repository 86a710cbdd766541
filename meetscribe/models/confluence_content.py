"""Confluence space and content tree data models."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Space:
    """Confluence space as returned by the space listings.

    Attributes:
        key: Space key (e.g., "TEAM")
        name: Display name
        id: Opaque space identifier (numeric in v1, string in v2)
    """
    key: str
    name: str
    id: str

    def to_dict(self) -> Dict[str, Any]:
        return {'key': self.key, 'name': self.name, 'id': self.id}


@dataclass
class PageItem:
    """Node in a space's content tree (a page or a folder).

    Created by a listing source from raw API data; only the hierarchy builder
    sets ``level`` and ``has_children``.

    Attributes:
        id: Unique content ID
        title: Content title
        type: "page" or "folder"
        parent_id: Parent content ID (None at root level)
        parent_type: Type of the parent ("page" or "folder"), when reported
        level: Depth in the tree, 0 for roots
        has_children: True if any other item names this one as its parent
        position: Explicit sort position, when reported
    """
    id: str
    title: str
    type: str = 'page'
    parent_id: Optional[str] = None
    parent_type: Optional[str] = None
    level: int = 0
    has_children: bool = False
    position: Optional[int] = None

    @property
    def is_folder(self) -> bool:
        return self.type == 'folder'

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'id': self.id,
            'title': self.title,
            'type': self.type,
            'level': self.level,
            'hasChildren': self.has_children,
        }
        if self.parent_id is not None:
            data['parentId'] = self.parent_id
        if self.parent_type is not None:
            data['parentType'] = self.parent_type
        if self.position is not None:
            data['position'] = self.position
        return data


@dataclass(frozen=True)
class PublishedPage:
    """Page created by the publisher.

    Attributes:
        page_id: New page ID
        title: Title Confluence stored
        url: Browsable URL (<base_url>/wiki<webui link>)
    """
    page_id: str
    title: str
    url: str

    def to_dict(self) -> Dict[str, Any]:
        return {'pageId': self.page_id, 'title': self.title, 'url': self.url}
