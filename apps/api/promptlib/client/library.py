"""
Client-side view model of the library: folders, tags, the visible prompts,
and the single active selection that decides which prompts those are.
"""

import logging
from typing import Optional

from promptlib.client.api import PromptLibraryClient, PromptLibraryClientError
from promptlib.schemas import (
    FolderCreate,
    FolderResponse,
    PromptCreate,
    PromptResponse,
    TagCreate,
    TagResponse,
)
from promptlib.selection import (
    FilterDescriptor,
    SelectionResolver,
    SidebarEntry,
    search_term,
    sidebar_entries,
)
from promptlib.templating import VariableSession

logger = logging.getLogger(__name__)


class LibraryBrowser:
    def __init__(self, client: PromptLibraryClient, resolver: Optional[SelectionResolver] = None):
        self.client = client
        self.selection = resolver or SelectionResolver()
        self.folders: list[FolderResponse] = []
        self.tags: list[TagResponse] = []
        self.prompts: list[PromptResponse] = []

    @property
    def current(self) -> FilterDescriptor:
        return self.selection.current

    @property
    def search_text(self) -> str:
        """What the search box shows; empty unless a search is the active view."""
        return search_term(self.selection.current)

    def sidebar(self) -> list[SidebarEntry]:
        return sidebar_entries(self.selection.current, self.folders, self.tags)

    async def load(self) -> None:
        """Fetch folders and tags, drop a selection that no longer exists, then list prompts."""
        self.folders = await self.client.list_folders()
        self.tags = await self.client.list_tags()
        self.selection.reconcile([f.id for f in self.folders], [t.id for t in self.tags])
        await self.refresh_prompts()

    async def refresh_prompts(self) -> list[PromptResponse]:
        self.prompts = await self.client.list_prompts(self.selection.current)
        return self.prompts

    # -- selection -----------------------------------------------------------

    async def select_all(self) -> list[PromptResponse]:
        self.selection.select_all()
        return await self.refresh_prompts()

    async def select_folder(self, folder_id: Optional[str]) -> list[PromptResponse]:
        self.selection.select_folder(folder_id)
        return await self.refresh_prompts()

    async def select_tag(self, tag_id: Optional[str]) -> list[PromptResponse]:
        self.selection.select_tag(tag_id)
        return await self.refresh_prompts()

    async def select_uncategorized(self) -> list[PromptResponse]:
        self.selection.select_uncategorized()
        return await self.refresh_prompts()

    async def search(self, term: str) -> list[PromptResponse]:
        self.selection.search(term)
        return await self.refresh_prompts()

    # -- folders and tags ----------------------------------------------------

    async def add_folder(self, name: str, description: Optional[str] = None) -> FolderResponse:
        if not name or not name.strip():
            raise ValueError("Folder name cannot be empty.")
        folder = await self.client.create_folder(FolderCreate(name=name, description=description))
        self.folders = sorted([*self.folders, folder], key=lambda f: f.name.casefold())
        return folder

    async def add_tag(self, name: str, color: Optional[str] = None) -> TagResponse:
        if not name or not name.strip():
            raise ValueError("Tag name cannot be empty.")
        tag = await self.client.create_tag(TagCreate(name=name, color=color))
        self.tags = sorted([*self.tags, tag], key=lambda t: t.name.casefold())
        return tag

    async def _refresh_after_failure(self) -> None:
        """Refetch prompts without masking the error that is being re-raised."""
        try:
            await self.refresh_prompts()
        except PromptLibraryClientError as e:
            logger.warning("Refetching prompts after a failed delete also failed: %s", e.message)

    async def delete_folder(self, folder_id: str) -> None:
        """
        Delete a folder. If it is the selected view, the selection moves to All
        whether or not the server accepts the delete; failures are re-raised.
        """
        changed = self.selection.folder_deleted(folder_id)
        try:
            await self.client.delete_folder(folder_id)
        except PromptLibraryClientError as e:
            logger.warning("Failed to delete folder %s: %s", folder_id, e.message)
            if changed:
                await self._refresh_after_failure()
            raise
        self.folders = [f for f in self.folders if f.id != folder_id]
        if changed:
            await self.refresh_prompts()

    async def delete_tag(self, tag_id: str) -> None:
        """Same selection contract as delete_folder."""
        changed = self.selection.tag_deleted(tag_id)
        try:
            await self.client.delete_tag(tag_id)
        except PromptLibraryClientError as e:
            logger.warning("Failed to delete tag %s: %s", tag_id, e.message)
            if changed:
                await self._refresh_after_failure()
            raise
        self.tags = [t for t in self.tags if t.id != tag_id]
        if changed:
            await self.refresh_prompts()

    # -- prompts -------------------------------------------------------------

    async def save_prompt(
        self, body: PromptCreate, prompt_id: Optional[str] = None
    ) -> PromptResponse:
        """Create (no prompt_id) or replace a prompt and keep the visible list in step."""
        if prompt_id is None:
            prompt = await self.client.create_prompt(body)
            self.prompts = [prompt, *self.prompts]
        else:
            prompt = await self.client.update_prompt(prompt_id, body)
            self.prompts = [prompt if p.id == prompt_id else p for p in self.prompts]
        return prompt

    async def delete_prompt(self, prompt_id: str) -> None:
        await self.client.delete_prompt(prompt_id)
        self.prompts = [p for p in self.prompts if p.id != prompt_id]

    def use_prompt(self, prompt: PromptResponse) -> VariableSession:
        """Open a variable session for filling in and copying out a prompt."""
        return VariableSession(prompt.content, title=prompt.title)
