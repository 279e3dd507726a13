"""Workout inbox triage for wearable-detected workouts."""

import copy
from pathlib import Path

from loguru import logger

from ..config import Settings, get_settings
from ..data.catalog import SAMPLE_INBOX_ITEMS
from ..db.engine import get_db_path, transaction
from ..db.repositories import WorkoutInboxRepository
from ..errors import ConflictError, NotFoundError
from ..models.inbox import InboxStatus, WorkoutInboxItem


class InboxService:
    """Service for listing and resolving a user's inbox.

    Items start ``pending`` and move once to ``categorized`` or ``ignored``.
    Repeating the same resolution returns the item unchanged; asking for the
    other terminal state is a conflict.
    """

    def __init__(self, db_path: Path | None = None, settings: Settings | None = None):
        self.db_path = db_path or get_db_path()
        self.settings = settings or get_settings()
        self.items = WorkoutInboxRepository(self.db_path)

    async def ensure_seeded(self, user_id: str) -> int:
        """Give a user with an empty inbox the sample items.

        Returns:
            Number of items inserted
        """
        if not self.settings.seed_sample_inbox:
            return 0

        async with transaction(self.db_path) as db:
            items = WorkoutInboxRepository(self.db_path, conn=db)
            if await items.count_for_user(user_id) > 0:
                return 0
            for data in SAMPLE_INBOX_ITEMS:
                await items.ingest(WorkoutInboxItem.from_dict(copy.deepcopy(data), user_id))

        logger.info(f"Seeded {len(SAMPLE_INBOX_ITEMS)} sample inbox items for user {user_id}")
        return len(SAMPLE_INBOX_ITEMS)

    async def list_items(self, user_id: str) -> list[WorkoutInboxItem]:
        return await self.items.list_for_user(user_id)

    async def ingest(self, user_id: str, data: dict) -> WorkoutInboxItem:
        """Stage a workout reported by a device."""
        item = await self.items.ingest(WorkoutInboxItem.from_dict(data, user_id))
        logger.debug(f"Ingested inbox item {item.id} ({item.auto_detected_type})")
        return item

    async def categorize(self, user_id: str, item_id: str, category: str) -> WorkoutInboxItem:
        return await self._resolve(user_id, item_id, InboxStatus.CATEGORIZED, category)

    async def ignore(self, user_id: str, item_id: str) -> WorkoutInboxItem:
        return await self._resolve(user_id, item_id, InboxStatus.IGNORED)

    async def _resolve(
        self,
        user_id: str,
        item_id: str,
        status: InboxStatus,
        category: str | None = None,
    ) -> WorkoutInboxItem:
        changed = await self.items.resolve(user_id, item_id, status, category)
        item = await self.items.get_owned(user_id, item_id)
        if item is None:
            raise NotFoundError("Inbox item not found")

        if not changed:
            if item.status != status:
                raise ConflictError(f"Inbox item was already {item.status.value}")
            logger.debug(f"Inbox item {item_id} already {status.value}")
        else:
            logger.info(f"Inbox item {item_id} {status.value}")
        return item
