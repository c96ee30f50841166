"""HTTP client and client-side library view model."""

from .api import PromptLibraryClient, PromptLibraryClientError
from .library import LibraryBrowser

__all__ = ["PromptLibraryClient", "PromptLibraryClientError", "LibraryBrowser"]
