"""Surface - element storage, visual state and selector queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generator, Union

from pulse.filters import AnyOf, Not, Tag
from pulse.types import (
    PENDING,
    STATE_ORDER,
    ElementId,
    MissingElementError,
    StateRegressionError,
)

# Selector arguments: plain class names or filter sentinels.
Selector = Union[str, Not, AnyOf, Tag]

# Hook callback signature.
HookCallback = Callable[["Surface", ElementId, "Element"], None]

# Default parent for create(): the surface body.
_BODY = object()


@dataclass
class Viewport:
    """Visible window over the document, in logical pixels."""

    width: float = 1280.0
    height: float = 800.0
    scroll_y: float = 0.0
    prefers_reduced_motion: bool = False
    touch: bool = False


@dataclass
class Element:
    id: ElementId
    tag: str
    classes: set[str] = field(default_factory=set)
    text: str = ""
    style: dict[str, str] = field(default_factory=dict)
    data: dict[str, str] = field(default_factory=dict)
    parent: ElementId | None = None
    children: list[ElementId] = field(default_factory=list)
    top: float = 0.0
    left: float = 0.0
    width: float = 0.0
    height: float = 0.0
    state: str = PENDING
    html_id: str = ""


class Surface:
    def __init__(self, viewport: Viewport | None = None) -> None:
        self.viewport = viewport if viewport is not None else Viewport()
        self._elements: dict[ElementId, Element] = {}
        self._next_id: int = 0
        self._by_html_id: dict[str, ElementId] = {}
        self._on_append: list[HookCallback] = []
        self._on_remove: list[HookCallback] = []
        self._body = self.create("body", parent=None)

    @property
    def body(self) -> ElementId:
        return self._body

    # -- Structure --

    def create(
        self,
        tag: str = "div",
        *classes: str,
        parent: ElementId | None | object = _BODY,
        text: str = "",
        data: dict[str, Any] | None = None,
        style: dict[str, str] | None = None,
        html_id: str = "",
        top: float = 0.0,
        left: float = 0.0,
        width: float = 0.0,
        height: float = 0.0,
    ) -> ElementId:
        """Create an element and append it to ``parent`` (the body by default)."""
        if parent is _BODY:
            parent = self._body
        if parent is not None and parent not in self._elements:
            raise MissingElementError(
                parent, f"Cannot append {tag} to missing element {parent}"
            )
        eid = self._next_id
        self._next_id += 1
        element = Element(
            id=eid,
            tag=tag,
            classes=set(classes),
            text=text,
            style=dict(style or {}),
            data={k: str(v) for k, v in (data or {}).items()},
            parent=parent,
            top=top,
            left=left,
            width=width,
            height=height,
            html_id=html_id,
        )
        self._elements[eid] = element
        if html_id:
            self._by_html_id[html_id] = eid
        if parent is not None:
            self._elements[parent].children.append(eid)
        for cb in self._on_append:
            cb(self, eid, element)
        return eid

    def remove(self, element_id: ElementId) -> None:
        """Remove an element and its subtree. Missing elements are ignored."""
        element = self._elements.get(element_id)
        if element is None:
            return
        for child in list(element.children):
            self.remove(child)
        if element.parent is not None:
            parent = self._elements.get(element.parent)
            if parent is not None and element_id in parent.children:
                parent.children.remove(element_id)
        del self._elements[element_id]
        if element.html_id and self._by_html_id.get(element.html_id) == element_id:
            del self._by_html_id[element.html_id]
        for cb in self._on_remove:
            cb(self, element_id, element)

    def clear_children(self, element_id: ElementId) -> None:
        for child in list(self.get(element_id).children):
            self.remove(child)

    def get(self, element_id: ElementId) -> Element:
        element = self._elements.get(element_id)
        if element is None:
            raise MissingElementError(
                element_id, f"Element {element_id} is not on the surface"
            )
        return element

    def exists(self, element_id: ElementId) -> bool:
        return element_id in self._elements

    def find(self, html_id: str) -> ElementId | None:
        """Look an element up by its html id."""
        return self._by_html_id.get(html_id)

    def __len__(self) -> int:
        return len(self._elements)

    # -- Visual state --

    def add_class(self, element_id: ElementId, cls: str) -> None:
        self.get(element_id).classes.add(cls)

    def remove_class(self, element_id: ElementId, cls: str) -> None:
        self.get(element_id).classes.discard(cls)

    def has_class(self, element_id: ElementId, cls: str) -> bool:
        element = self._elements.get(element_id)
        return element is not None and cls in element.classes

    def set_style(self, element_id: ElementId, **props: str) -> None:
        style = self.get(element_id).style
        for name, value in props.items():
            name = name.replace("_", "-")
            if value == "":
                style.pop(name, None)
            else:
                style[name] = value

    def set_text(self, element_id: ElementId, text: str) -> None:
        self.get(element_id).text = text

    def set_data(self, element_id: ElementId, key: str, value: Any) -> None:
        self.get(element_id).data[key] = str(value)

    def set_element_state(self, element_id: ElementId, state: str) -> None:
        """Move an element's effect state forward. Same-state writes are no-ops."""
        if state not in STATE_ORDER:
            raise ValueError(f"Unknown element state {state!r}")
        element = self.get(element_id)
        if STATE_ORDER[state] < STATE_ORDER[element.state]:
            raise StateRegressionError(
                f"Element {element_id} cannot move from {element.state!r} to {state!r}"
            )
        element.state = state

    # -- Queries --

    def query(self, *args: Selector) -> list[ElementId]:
        """Return matching element ids in document order."""
        if not args:
            return []
        return [eid for eid in self._walk(self._body) if self.matches(eid, *args)]

    def query_one(self, *args: Selector) -> ElementId | None:
        found = self.query(*args)
        return found[0] if found else None

    def matches(self, element_id: ElementId, *args: Selector) -> bool:
        element = self._elements.get(element_id)
        if element is None:
            return False
        for arg in args:
            if isinstance(arg, Not):
                if arg.cls in element.classes:
                    return False
            elif isinstance(arg, AnyOf):
                if element.classes.isdisjoint(arg.classes):
                    return False
            elif isinstance(arg, Tag):
                if element.tag != arg.name:
                    return False
            elif arg not in element.classes:
                return False
        return True

    def descendants(self, element_id: ElementId, *args: Selector) -> list[ElementId]:
        found = list(self._walk(element_id))[1:]
        if args:
            found = [eid for eid in found if self.matches(eid, *args)]
        return found

    def closest(self, element_id: ElementId, *args: Selector) -> ElementId | None:
        current: ElementId | None = element_id
        while current is not None:
            if self.matches(current, *args):
                return current
            current = self._elements[current].parent
        return None

    def _walk(self, root: ElementId) -> Generator[ElementId, None, None]:
        if root not in self._elements:
            return
        stack = [root]
        while stack:
            eid = stack.pop()
            yield eid
            stack.extend(reversed(self._elements[eid].children))

    # -- Change hooks --

    def on_append(self, callback: HookCallback) -> None:
        self._on_append.append(callback)

    def on_remove(self, callback: HookCallback) -> None:
        self._on_remove.append(callback)

    def off_append(self, callback: HookCallback) -> None:
        try:
            self._on_append.remove(callback)
        except ValueError:
            pass

    def off_remove(self, callback: HookCallback) -> None:
        try:
            self._on_remove.remove(callback)
        except ValueError:
            pass

    # -- Snapshot --

    def snapshot(self) -> dict[str, Any]:
        elements = []
        for eid in self._walk(self._body):
            el = self._elements[eid]
            elements.append({
                "id": el.id,
                "tag": el.tag,
                "classes": sorted(el.classes),
                "text": el.text,
                "style": dict(el.style),
                "data": dict(el.data),
                "parent": el.parent,
                "state": el.state,
            })
        return {
            "viewport": {
                "width": self.viewport.width,
                "height": self.viewport.height,
                "scroll_y": self.viewport.scroll_y,
            },
            "elements": elements,
        }
