"""Tests for workout inbox triage."""

import pytest

from hoop_metrics.errors import ConflictError, NotFoundError
from hoop_metrics.models import InboxStatus
from hoop_metrics.services import InboxService


@pytest.fixture
def service(db_path, settings):
    return InboxService(db_path, settings)


@pytest.fixture
async def item(service, user):
    await service.ensure_seeded(user.id)
    return (await service.list_items(user.id))[0]


class TestSeeding:
    async def test_fresh_user_seeded_once(self, service, user):
        assert await service.ensure_seeded(user.id) == 3
        assert await service.ensure_seeded(user.id) == 0

        first = await service.list_items(user.id)
        second = await service.list_items(user.id)
        assert len(first) == 3
        assert [i.id for i in first] == [i.id for i in second]

    async def test_list_is_a_pure_read(self, service, user):
        assert await service.list_items(user.id) == []

    async def test_seeding_disabled(self, db_path, settings, user):
        service = InboxService(db_path, settings.model_copy(update={"seed_sample_inbox": False}))
        assert await service.ensure_seeded(user.id) == 0

    async def test_user_with_items_not_seeded(self, service, user):
        await service.ingest(user.id, {"title": "Pickup Game", "auto_detected_type": "Basketball"})

        assert await service.ensure_seeded(user.id) == 0
        assert [i.title for i in await service.list_items(user.id)] == ["Pickup Game"]

    async def test_newest_first(self, service, user):
        await service.ensure_seeded(user.id)
        latest = await service.ingest(user.id, {"title": "Evening Shootaround"})

        items = await service.list_items(user.id)
        assert items[0].id == latest.id
        assert all(i.status == InboxStatus.PENDING for i in items)


class TestCategorize:
    async def test_categorize_pending(self, service, user, item):
        result = await service.categorize(user.id, item.id, "Basketball")

        assert result.status == InboxStatus.CATEGORIZED
        assert result.category == "Basketball"
        assert result.processed_at is not None

    async def test_categorize_again_keeps_state(self, service, user, item):
        first = await service.categorize(user.id, item.id, "Basketball")
        second = await service.categorize(user.id, item.id, "Cardio")

        assert second.status == InboxStatus.CATEGORIZED
        assert second.category == "Basketball"
        assert second.processed_at == first.processed_at

    async def test_confidence_and_summary_unchanged(self, service, user, item):
        result = await service.categorize(user.id, item.id, "Basketball")

        assert result.confidence == item.confidence
        assert result.ai_summary == item.ai_summary

    async def test_ignored_item_cannot_be_categorized(self, service, user, item):
        await service.ignore(user.id, item.id)

        with pytest.raises(ConflictError):
            await service.categorize(user.id, item.id, "Basketball")

        assert (await service.items.get_owned(user.id, item.id)).status == InboxStatus.IGNORED

    async def test_other_users_item(self, service, other_user, item):
        with pytest.raises(NotFoundError):
            await service.categorize(other_user.id, item.id, "Basketball")

    async def test_missing_item(self, service, user):
        with pytest.raises(NotFoundError):
            await service.categorize(user.id, "missing", "Basketball")


class TestIgnore:
    async def test_ignore_twice(self, service, user, item):
        first = await service.ignore(user.id, item.id)
        second = await service.ignore(user.id, item.id)

        assert first.status == InboxStatus.IGNORED
        assert second.status == InboxStatus.IGNORED
        assert second.category is None
        assert second.processed_at == first.processed_at

    async def test_categorized_item_cannot_be_ignored(self, service, user, item):
        await service.categorize(user.id, item.id, "Strength")

        with pytest.raises(ConflictError):
            await service.ignore(user.id, item.id)
