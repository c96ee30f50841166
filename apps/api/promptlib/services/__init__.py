from .errors import LibraryError, DuplicateNameError, InvalidReferenceError
from .folders import folder_service
from .prompts import PromptFilters, prompt_service
from .tags import tag_service

__all__ = [
    "LibraryError",
    "DuplicateNameError",
    "InvalidReferenceError",
    "PromptFilters",
    "folder_service",
    "prompt_service",
    "tag_service",
]
