"""Which prompts are visible: the active FilterDescriptor and its query parameters."""

from .descriptor import (
    AllPrompts,
    FilterDescriptor,
    FolderView,
    SearchView,
    SidebarEntry,
    SidebarKey,
    TagView,
    Uncategorized,
    highlighted,
    search_term,
    sidebar_entries,
    to_query,
)
from .resolver import SelectionResolver

__all__ = [
    "AllPrompts",
    "FilterDescriptor",
    "FolderView",
    "SearchView",
    "SidebarEntry",
    "SidebarKey",
    "TagView",
    "Uncategorized",
    "SelectionResolver",
    "highlighted",
    "search_term",
    "sidebar_entries",
    "to_query",
]
