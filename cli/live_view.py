"""
Client-side view state kept in step with the server by broadcast events.

Each view fetches its full list once, then applies events: creation appends
(news prepends, being newest-first), deletion filters out by id. Nothing is
re-fetched on reconnect; an event published between the fetch and the
subscription is missed until the next full refresh.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional


@dataclass
class LiveCollection:
    """One locally held list of entities"""
    name: str
    items: List[Dict[str, Any]] = field(default_factory=list)
    newest_first: bool = False
    accepts: Optional[Callable[[Dict[str, Any]], bool]] = None

    def reset(self, items: List[Dict[str, Any]]) -> None:
        self.items = list(items)

    def add(self, entity: Dict[str, Any]) -> bool:
        if not isinstance(entity, dict):
            return False
        if self.accepts is not None and not self.accepts(entity):
            return False
        if self.newest_first:
            self.items.insert(0, entity)
        else:
            self.items.append(entity)
        return True

    def remove(self, entity_id: str) -> bool:
        before = len(self.items)
        self.items = [item for item in self.items if item.get("id") != entity_id]
        return len(self.items) != before

    def ids(self) -> List[str]:
        return [item.get("id") for item in self.items]


# event name -> (collection, action)
EVENT_ROUTES = {
    "section-added": ("sections", "add"),
    "section-deleted": ("sections", "remove"),
    "file-uploaded": ("files", "add"),
    "file-deleted": ("files", "remove"),
    "news-published": ("news", "add"),
    "news-deleted": ("news", "remove"),
    "knowledge-added": ("knowledge", "add"),
    "knowledge-deleted": ("knowledge", "remove"),
}


class PortalViews:
    """
    The set of views a client keeps open.

    ``files`` tracks the currently selected section only; deleting that
    section clears the selection and its files.
    """

    def __init__(self, selected_section: Optional[str] = None):
        self.selected_section = selected_section
        self.collections: Dict[str, LiveCollection] = {
            "sections": LiveCollection("sections"),
            "files": LiveCollection("files", accepts=self._in_selected_section),
            "news": LiveCollection("news", newest_first=True),
            "knowledge": LiveCollection("knowledge"),
        }

    def __getitem__(self, name: str) -> LiveCollection:
        return self.collections[name]

    def _in_selected_section(self, file: Dict[str, Any]) -> bool:
        if self.selected_section is None:
            return False
        section_id = file.get("sectionId")
        if section_id is None and isinstance(file.get("section"), dict):
            section_id = file["section"].get("id")
        return section_id == self.selected_section

    def select_section(self, section_id: Optional[str], files: Optional[List[Dict[str, Any]]] = None) -> None:
        self.selected_section = section_id
        self.collections["files"].reset(files or [])

    def apply(self, message: Dict[str, Any]) -> bool:
        """
        Apply one broadcast frame ``{"type", "data", ...}``.

        Returns True if local state changed. Frames that are not content
        events (connected, pong, ...) are ignored.
        """
        route = EVENT_ROUTES.get(message.get("type"))
        if route is None:
            return False

        collection_name, action = route
        data = message.get("data")
        collection = self.collections[collection_name]

        if action == "add":
            return collection.add(data)

        changed = collection.remove(data)
        if message.get("type") == "section-deleted" and data == self.selected_section:
            self.select_section(None)
            changed = True
        return changed
