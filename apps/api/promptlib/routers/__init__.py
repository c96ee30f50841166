from .prompts import router as prompts_router
from .folders import router as folders_router
from .tags import router as tags_router

ROUTERS = (prompts_router, folders_router, tags_router)

__all__ = [
    "ROUTERS",
    "prompts_router",
    "folders_router",
    "tags_router",
]
