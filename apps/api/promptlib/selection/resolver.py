"""Selection state machine: one FilterDescriptor, replaced wholesale per user action."""

import logging
from typing import Iterable, Optional

from .descriptor import (
    AllPrompts,
    FilterDescriptor,
    FolderView,
    SearchView,
    TagView,
    Uncategorized,
    to_query,
)

logger = logging.getLogger(__name__)


class SelectionResolver:
    """
    Holds the current view. Every action assigns a brand new descriptor, so
    folder, tag, uncategorized and search can never be active together.
    """

    def __init__(self, initial: Optional[FilterDescriptor] = None):
        self._current: FilterDescriptor = initial if initial is not None else AllPrompts()

    @property
    def current(self) -> FilterDescriptor:
        return self._current

    def _set(self, descriptor: FilterDescriptor) -> FilterDescriptor:
        if descriptor != self._current:
            logger.debug("Selection %r -> %r", self._current, descriptor)
        self._current = descriptor
        return descriptor

    def select_all(self) -> FilterDescriptor:
        return self._set(AllPrompts())

    def select_folder(self, folder_id: Optional[str]) -> FilterDescriptor:
        """None selects "All Prompts"."""
        return self._set(FolderView(folder_id) if folder_id else AllPrompts())

    def select_tag(self, tag_id: Optional[str]) -> FilterDescriptor:
        """None selects "All Prompts"."""
        return self._set(TagView(tag_id) if tag_id else AllPrompts())

    def select_uncategorized(self) -> FilterDescriptor:
        return self._set(Uncategorized())

    def search(self, term: Optional[str]) -> FilterDescriptor:
        """Empty term is the same as "All Prompts"."""
        return self._set(SearchView(term) if term else AllPrompts())

    def folder_deleted(self, folder_id: str) -> bool:
        """Fall back to All when the deleted folder is the selection. Returns True if state changed."""
        if self._current == FolderView(folder_id):
            self._set(AllPrompts())
            return True
        return False

    def tag_deleted(self, tag_id: str) -> bool:
        if self._current == TagView(tag_id):
            self._set(AllPrompts())
            return True
        return False

    def reconcile(self, folder_ids: Iterable[str], tag_ids: Iterable[str]) -> bool:
        """Drop a folder/tag selection whose target no longer exists."""
        current = self._current
        if isinstance(current, FolderView) and current.folder_id not in set(folder_ids):
            return self.folder_deleted(current.folder_id)
        if isinstance(current, TagView) and current.tag_id not in set(tag_ids):
            return self.tag_deleted(current.tag_id)
        return False

    def query(self) -> dict[str, str]:
        return to_query(self._current)
