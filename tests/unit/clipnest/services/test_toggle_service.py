import asyncio

import pytest
from beanie import PydanticObjectId

from clipnest.core.exceptions import NotFoundError, ValidationError
from clipnest.models.enums import LikeKind


class TestLikeToggle:
    @pytest.mark.asyncio
    async def test_toggle_twice_is_identity(self, services, make_user, make_video):
        alice = await make_user()
        video = await make_video(alice)

        first = await services.toggles.toggle_like(alice, LikeKind.VIDEO, video.id)
        assert first.active is True
        assert (await services.toggles.like_status(alice, "video", video.id)).like_count == 1

        second = await services.toggles.toggle_like(alice, LikeKind.VIDEO, video.id)
        assert second.active is False
        status = await services.toggles.like_status(alice, "video", video.id)
        assert status.is_liked is False
        assert status.like_count == 0

    @pytest.mark.asyncio
    async def test_counts_are_per_liker(self, services, make_user, make_video):
        alice = await make_user()
        bob = await make_user("bob")
        video = await make_video(alice)
        await services.toggles.toggle_like(alice, "video", video.id)
        await services.toggles.toggle_like(bob, "video", video.id)

        status = await services.toggles.like_status(bob, "video", video.id)
        assert status.is_liked is True
        assert status.like_count == 2

    @pytest.mark.asyncio
    async def test_self_like_allowed(self, services, make_user, make_video):
        alice = await make_user()
        video = await make_video(alice)
        assert (await services.toggles.toggle_like(alice, "video", video.id)).active is True

    @pytest.mark.asyncio
    async def test_video_and_comment_targets_must_exist(self, services, make_user):
        alice = await make_user()
        with pytest.raises(NotFoundError):
            await services.toggles.toggle_like(alice, "video", PydanticObjectId())
        with pytest.raises(NotFoundError):
            await services.toggles.toggle_like(alice, "comment", PydanticObjectId())

    @pytest.mark.asyncio
    async def test_draft_likeable_only_by_owner(self, services, make_user, make_video):
        alice = await make_user()
        bob = await make_user("bob")
        draft = await make_video(alice, "draft", is_published=False)
        with pytest.raises(NotFoundError):
            await services.toggles.toggle_like(bob, "video", draft.id)
        assert (await services.toggles.like_status(bob, "video", draft.id)).like_count == 0
        assert (await services.toggles.toggle_like(alice, "video", draft.id)).active is True

    @pytest.mark.asyncio
    async def test_tweet_like_accepted_by_id(self, services, make_user):
        alice = await make_user()
        tweet_id = PydanticObjectId()
        assert (await services.toggles.toggle_like(alice, "tweet", tweet_id)).active is True
        assert (await services.toggles.like_status(alice, "tweet", tweet_id)).like_count == 1

    @pytest.mark.asyncio
    async def test_comment_like(self, services, make_user, make_video):
        alice = await make_user()
        video = await make_video(alice)
        comment = await services.comments.add(video.id, alice, "first!")
        assert (await services.toggles.toggle_like(alice, "comment", comment.id)).active is True
        # a video like on the same id is a separate edge
        assert (await services.toggles.like_status(alice, "video", comment.id)).is_liked is False

    @pytest.mark.asyncio
    async def test_unknown_kind(self, services, make_user):
        alice = await make_user()
        with pytest.raises(ValidationError):
            await services.toggles.toggle_like(alice, "story", PydanticObjectId())

    @pytest.mark.asyncio
    async def test_concurrent_add_keeps_one_edge(self, services, make_user, make_video, monkeypatch):
        alice = await make_user()
        video = await make_video(alice)

        async def _no_edge(*args, **kwargs):
            return None

        # Both toggles observe "no edge" and race to insert it.
        monkeypatch.setattr(services.toggles.likes, "find_edge", _no_edge)
        results = await asyncio.gather(
            services.toggles.toggle_like(alice, "video", video.id),
            services.toggles.toggle_like(alice, "video", video.id),
        )
        assert [r.active for r in results] == [True, True]
        assert await services.toggles.likes.count_for_target(LikeKind.VIDEO, video.id) == 1

    @pytest.mark.asyncio
    async def test_concurrent_remove_reports_inactive(self, services, make_user, make_video, monkeypatch):
        alice = await make_user()
        video = await make_video(alice)
        await services.toggles.toggle_like(alice, "video", video.id)
        stale = await services.toggles.likes.find_edge(LikeKind.VIDEO, video.id, alice.id)
        assert (await services.toggles.toggle_like(alice, "video", video.id)).active is False

        async def _stale_edge(*args, **kwargs):
            return stale

        # A second toggle that read the edge before the first one deleted it.
        monkeypatch.setattr(services.toggles.likes, "find_edge", _stale_edge)
        assert (await services.toggles.toggle_like(alice, "video", video.id)).active is False
        assert await services.toggles.likes.count_for_target(LikeKind.VIDEO, video.id) == 0


class TestSubscriptionToggle:
    @pytest.mark.asyncio
    async def test_subscribe_and_unsubscribe(self, services, make_user):
        alice = await make_user()
        bob = await make_user("bob")

        assert (await services.toggles.toggle_subscription(alice, bob.id)).active is True
        profile = await services.views.channel_profile("bob", alice)
        assert profile.subscribers_count == 1
        assert profile.is_subscribed is True

        assert (await services.toggles.toggle_subscription(alice, bob.id)).active is False
        profile = await services.views.channel_profile("bob", alice)
        assert profile.subscribers_count == 0
        assert profile.is_subscribed is False

    @pytest.mark.asyncio
    async def test_self_subscription_forbidden(self, services, make_user):
        alice = await make_user()
        with pytest.raises(ValidationError):
            await services.toggles.toggle_subscription(alice, alice.id)

    @pytest.mark.asyncio
    async def test_channel_must_exist(self, services, make_user):
        alice = await make_user()
        with pytest.raises(NotFoundError):
            await services.toggles.toggle_subscription(alice, PydanticObjectId())

    @pytest.mark.asyncio
    async def test_concurrent_subscribe(self, services, make_user, monkeypatch):
        alice = await make_user()
        bob = await make_user("bob")

        async def _no_edge(*args, **kwargs):
            return None

        monkeypatch.setattr(services.toggles.subscriptions, "find_edge", _no_edge)
        results = await asyncio.gather(
            services.toggles.toggle_subscription(alice, bob.id),
            services.toggles.toggle_subscription(alice, bob.id),
        )
        assert all(r.active for r in results)
        assert await services.toggles.subscriptions.count_subscribers(bob.id) == 1

    @pytest.mark.asyncio
    async def test_scenario_two_subscribers(self, services, make_user):
        alice = await make_user()
        bob = await make_user("bob")
        carol = await make_user("carol")

        await services.toggles.toggle_subscription(alice, carol.id)
        await services.toggles.toggle_subscription(bob, carol.id)
        await services.toggles.toggle_subscription(alice, carol.id)

        anonymous = await services.views.channel_profile("carol")
        assert anonymous.subscribers_count == 1
        assert anonymous.is_subscribed is False
        assert (await services.views.channel_profile("bob")).subscribed_to_count == 1
