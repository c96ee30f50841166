"""Shared API constants."""

# folderId value meaning "prompts without a folder"
UNCATEGORIZED_FOLDER = "uncategorized"

# Query parameter names understood by GET /api/prompts
FOLDER_PARAM = "folderId"
TAG_PARAM = "tagId"
SEARCH_PARAM = "search"

API_PREFIX = "/api"
