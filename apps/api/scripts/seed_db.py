"""
Seed the database with a few folders, tags and templated prompts.
Run from apps/api after `alembic upgrade head`: python scripts/seed_db.py
"""
import asyncio
import logging
import sys
from pathlib import Path

# Ensure promptlib is importable when run from repo root or apps/api
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from promptlib.db.session import async_session
from promptlib.schemas import FolderCreate, PromptCreate, TagCreate
from promptlib.services import DuplicateNameError, folder_service, prompt_service, tag_service

logger = logging.getLogger(__name__)

FOLDERS = [
    ("Writing", "Drafting and editing helpers"),
    ("Engineering", "Code review and debugging"),
]

TAGS = [("email", "#2563eb"), ("review", "#16a34a"), ("summary", "#d97706")]

# (folder name or None, tag names, title, description, content)
PROMPTS = [
    (
        "Writing",
        ["email"],
        "Polite follow-up",
        "Nudge someone who has not replied",
        "Hi {{name}},\n\nJust following up on {{topic}}. Could you let me know by {{deadline}}?\n\nThanks,\n{{sender}}",
    ),
    (
        "Engineering",
        ["review"],
        "Code review",
        None,
        "Review the following {{language}} code for bugs and readability:\n\n{{code}}",
    ),
    (
        None,
        ["summary"],
        "Summarize for an audience",
        "Uncategorized example",
        "Summarize this text for {{audience}} in at most {{length}} sentences:\n\n{{text}}",
    ),
]


async def seed() -> None:
    async with async_session() as db:
        folder_ids: dict[str, str] = {}
        for name, description in FOLDERS:
            try:
                folder = await folder_service.create(db, FolderCreate(name=name, description=description))
            except DuplicateNameError:
                logger.info("Folder %s already exists; skipping seed", name)
                await db.rollback()
                return
            folder_ids[name] = folder.id

        tag_ids: dict[str, str] = {}
        for name, color in TAGS:
            tag = await tag_service.create(db, TagCreate(name=name, color=color))
            tag_ids[name] = tag.id

        for folder_name, tag_names, title, description, content in PROMPTS:
            await prompt_service.create(
                db,
                PromptCreate(
                    title=title,
                    content=content,
                    description=description,
                    tag_ids=[tag_ids[t] for t in tag_names],
                    folder_id=folder_ids.get(folder_name) if folder_name else None,
                ),
            )
        await db.commit()
        logger.info("Seeded %d folders, %d tags, %d prompts", len(FOLDERS), len(TAGS), len(PROMPTS))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())
