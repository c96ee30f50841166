"""
The single active view over the prompt collection.

A FilterDescriptor is exactly one of AllPrompts, Uncategorized, FolderView,
TagView or SearchView. Everything the presentation needs (listing query,
highlighted sidebar row, search box text) is derived from it.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Literal, Optional, Union

from promptlib.core.constants import (
    FOLDER_PARAM,
    SEARCH_PARAM,
    TAG_PARAM,
    UNCATEGORIZED_FOLDER,
)


@dataclass(frozen=True)
class AllPrompts:
    pass


@dataclass(frozen=True)
class Uncategorized:
    pass


@dataclass(frozen=True)
class FolderView:
    folder_id: str


@dataclass(frozen=True)
class TagView:
    tag_id: str


@dataclass(frozen=True)
class SearchView:
    term: str


FilterDescriptor = Union[AllPrompts, Uncategorized, FolderView, TagView, SearchView]

SidebarKind = Literal["all", "uncategorized", "folder", "tag"]
SidebarKey = tuple[SidebarKind, Optional[str]]


@dataclass(frozen=True)
class SidebarEntry:
    kind: SidebarKind
    id: Optional[str]
    label: str
    selected: bool

    @property
    def key(self) -> SidebarKey:
        return (self.kind, self.id)


def to_query(descriptor: FilterDescriptor) -> dict[str, str]:
    """Query parameters for GET /api/prompts."""
    if isinstance(descriptor, Uncategorized):
        return {FOLDER_PARAM: UNCATEGORIZED_FOLDER}
    if isinstance(descriptor, FolderView):
        return {FOLDER_PARAM: descriptor.folder_id}
    if isinstance(descriptor, TagView):
        return {TAG_PARAM: descriptor.tag_id}
    if isinstance(descriptor, SearchView):
        return {SEARCH_PARAM: descriptor.term}
    return {}


def highlighted(descriptor: FilterDescriptor) -> SidebarKey:
    """Sidebar row that shows as selected. A search highlights "All Prompts"."""
    if isinstance(descriptor, Uncategorized):
        return ("uncategorized", None)
    if isinstance(descriptor, FolderView):
        return ("folder", descriptor.folder_id)
    if isinstance(descriptor, TagView):
        return ("tag", descriptor.tag_id)
    return ("all", None)


def search_term(descriptor: FilterDescriptor) -> str:
    return descriptor.term if isinstance(descriptor, SearchView) else ""


def sidebar_entries(
    descriptor: FilterDescriptor,
    folders: Iterable[Any] = (),
    tags: Iterable[Any] = (),
) -> list[SidebarEntry]:
    """
    Rows for {All, Uncategorized, folders..., tags...}; folders and tags need
    ``id`` and ``name`` attributes. The selected flag is computed, never stored.
    """
    current = highlighted(descriptor)
    rows: list[tuple[SidebarKind, Optional[str], str]] = [
        ("all", None, "All Prompts"),
        ("uncategorized", None, "Uncategorized"),
    ]
    rows += [("folder", f.id, f.name) for f in folders]
    rows += [("tag", t.id, t.name) for t in tags]
    return [
        SidebarEntry(kind=kind, id=id_, label=label, selected=(kind, id_) == current)
        for kind, id_, label in rows
    ]
