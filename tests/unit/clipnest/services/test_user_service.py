import pytest
from beanie import PydanticObjectId

from clipnest.core.exceptions import ConflictError, NotFoundError, ValidationError


class TestProfile:
    @pytest.mark.asyncio
    async def test_update_profile(self, services, make_user):
        alice = await make_user()
        updated = await services.users.update_profile(alice, full_name="Alice Liddell", email="LIDDELL@example.com")
        assert updated.full_name == "Alice Liddell"
        assert updated.email == "liddell@example.com"
        assert updated.updated_at >= alice.updated_at

    @pytest.mark.asyncio
    async def test_update_profile_requires_a_field(self, services, make_user):
        alice = await make_user()
        with pytest.raises(ValidationError):
            await services.users.update_profile(alice)

    @pytest.mark.asyncio
    async def test_email_taken(self, services, make_user):
        alice = await make_user()
        await make_user("bob")
        with pytest.raises(ConflictError):
            await services.users.update_profile(alice, email="bob@example.com")

    @pytest.mark.asyncio
    async def test_avatar_and_cover_image(self, services, make_user):
        alice = await make_user()
        updated = await services.users.update_avatar(alice, "https://media.example.com/new.png")
        assert updated.avatar == "https://media.example.com/new.png"
        updated = await services.users.update_cover_image(alice, "https://media.example.com/cover.png")
        assert updated.cover_image == "https://media.example.com/cover.png"
        with pytest.raises(ValidationError):
            await services.users.update_avatar(alice, "")


class TestWatchHistory:
    @pytest.mark.asyncio
    async def test_rewatch_moves_to_front_without_duplicates(self, services, make_user, make_video):
        alice = await make_user()
        v1 = await make_video(alice, "one")
        v2 = await make_video(alice, "two")

        await services.users.add_to_watch_history(alice, v1.id)
        await services.users.add_to_watch_history(alice, v2.id)
        updated = await services.users.add_to_watch_history(alice, v1.id)
        assert updated.watch_history == [v1.id, v2.id]

    @pytest.mark.asyncio
    async def test_history_is_capped(self, services, settings, make_user, make_video):
        alice = await make_user()
        videos = [await make_video(alice, f"v{i}") for i in range(settings.WATCH_HISTORY_LIMIT + 2)]
        for video in videos:
            updated = await services.users.add_to_watch_history(alice, video.id)

        assert len(updated.watch_history) == settings.WATCH_HISTORY_LIMIT
        assert updated.watch_history[0] == videos[-1].id
        assert videos[0].id not in updated.watch_history

    @pytest.mark.asyncio
    async def test_unknown_video(self, services, make_user):
        alice = await make_user()
        with pytest.raises(NotFoundError):
            await services.users.add_to_watch_history(alice, PydanticObjectId())

    @pytest.mark.asyncio
    async def test_lost_race_is_not_retried(self, services, store, make_user, make_video, monkeypatch):
        alice = await make_user()
        video = await make_video(alice)

        history_writes = []

        async def _history_changed(query, changes):
            history_writes.append(query)
            return None

        monkeypatch.setattr(store.users, "update", _history_changed)
        with pytest.raises(ConflictError):
            await services.users.add_to_watch_history(alice, video.id)
        assert len(history_writes) == 1

    @pytest.mark.asyncio
    async def test_other_users_draft_rejected(self, services, make_user, make_video):
        alice = await make_user()
        bob = await make_user("bob")
        draft = await make_video(alice, "draft", is_published=False)
        with pytest.raises(NotFoundError):
            await services.users.add_to_watch_history(bob, draft.id)
        updated = await services.users.add_to_watch_history(alice, draft.id)
        assert updated.watch_history == [draft.id]
