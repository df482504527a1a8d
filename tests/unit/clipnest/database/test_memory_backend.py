import asyncio

import pytest
from beanie import PydanticObjectId

from clipnest.database.backends.memory_odm_backend import MemoryODMBackend, MemoryStore, matches
from clipnest.database.exceptions import DocumentNotFoundError, DuplicateInsertError
from clipnest.models.documents import LikeDocument, PlaylistDocument, UserDocument, VideoDocument
from clipnest.models.enums import LikeKind


def _user(username: str, email: str = None) -> UserDocument:
    return UserDocument(
        username=username,
        email=email or f"{username}@example.com",
        full_name=username.title(),
        password_hash="hash",
        avatar="https://media.example.com/a.png",
    )


@pytest.fixture
def users():
    return MemoryODMBackend(UserDocument, MemoryStore())


class TestMatches:
    def test_equality_and_array_membership(self):
        doc = {"name": "a", "tags": ["x", "y"]}
        assert matches(doc, {"name": "a"})
        assert matches(doc, {"tags": "x"})
        assert not matches(doc, {"tags": "z"})
        assert matches(doc, {"tags": ["x", "y"]})
        assert not matches(doc, {"tags": ["y", "x"]})

    def test_operators(self):
        doc = {"n": 3, "maybe": None}
        assert matches(doc, {"n": {"$in": [1, 3]}})
        assert matches(doc, {"n": {"$ne": 4}})
        assert not matches(doc, {"n": {"$ne": 3}})
        assert matches(doc, {"maybe": {"$exists": True}})
        assert matches(doc, {"missing": {"$exists": False}})
        assert matches(doc, {"missing": None})

    def test_or(self):
        doc = {"username": "alice", "email": "a@example.com"}
        assert matches(doc, {"$or": [{"username": "bob"}, {"email": "a@example.com"}]})
        assert not matches(doc, {"$or": [{"username": "bob"}, {"email": "b@example.com"}]})

    def test_unsupported_operator(self):
        with pytest.raises(ValueError):
            matches({"n": 1}, {"n": {"$gt": 0}})


class TestMemoryODMBackend:
    @pytest.mark.asyncio
    async def test_insert_assigns_id_and_get_returns_copy(self, users):
        user = await users.insert(_user("alice"))
        assert isinstance(user.id, PydanticObjectId)

        fetched = await users.get(user.id)
        fetched.full_name = "Changed"
        assert (await users.get(user.id)).full_name == "Alice"

    @pytest.mark.asyncio
    async def test_get_missing_raises(self, users):
        with pytest.raises(DocumentNotFoundError):
            await users.get(PydanticObjectId())

    @pytest.mark.asyncio
    async def test_unique_index_enforced_on_insert(self, users):
        await users.insert(_user("alice"))
        with pytest.raises(DuplicateInsertError):
            await users.insert(_user("alice", email="other@example.com"))
        with pytest.raises(DuplicateInsertError):
            await users.insert(_user("bob", email="alice@example.com"))
        assert await users.count() == 1

    @pytest.mark.asyncio
    async def test_compound_unique_index(self):
        likes = MemoryODMBackend(LikeDocument, MemoryStore())
        target, liker = PydanticObjectId(), PydanticObjectId()
        await likes.insert(LikeDocument(kind=LikeKind.VIDEO, target=target, liked_by=liker))
        # same target under another kind is a different edge
        await likes.insert(LikeDocument(kind=LikeKind.COMMENT, target=target, liked_by=liker))
        with pytest.raises(DuplicateInsertError):
            await likes.insert(LikeDocument(kind=LikeKind.VIDEO, target=target, liked_by=liker))
        assert await likes.count({"kind": "video"}) == 1

    @pytest.mark.asyncio
    async def test_update_is_compare_and_set(self, users):
        user = await users.insert(_user("alice"))
        await users.update({"_id": user.id}, {"refresh_token": "t1"})

        assert await users.update({"_id": user.id, "refresh_token": "stale"}, {"refresh_token": "t2"}) is None
        updated = await users.update({"_id": user.id, "refresh_token": "t1"}, {"refresh_token": "t2"})
        assert updated.refresh_token == "t2"

    @pytest.mark.asyncio
    async def test_update_respects_unique_index(self, users):
        await users.insert(_user("alice"))
        bob = await users.insert(_user("bob"))
        with pytest.raises(DuplicateInsertError):
            await users.update({"_id": bob.id}, {"email": "alice@example.com"})
        assert (await users.get(bob.id)).email == "bob@example.com"

    @pytest.mark.asyncio
    async def test_update_list_compare_and_set(self):
        playlists = MemoryODMBackend(PlaylistDocument, MemoryStore())
        video = PydanticObjectId()
        playlist = await playlists.insert(PlaylistDocument(owner=PydanticObjectId(), name="mix"))

        assert await playlists.update({"_id": playlist.id, "videos": [video]}, {"videos": []}) is None
        updated = await playlists.update({"_id": playlist.id, "videos": []}, {"videos": [video]})
        assert updated.videos == [video]

    @pytest.mark.asyncio
    async def test_increment(self):
        videos = MemoryODMBackend(VideoDocument, MemoryStore())
        video = await videos.insert(
            VideoDocument(
                owner=PydanticObjectId(),
                title="t",
                description="d",
                video_file="https://media.example.com/v.mp4",
                thumbnail="https://media.example.com/t.png",
            )
        )
        await asyncio.gather(*[videos.increment({"_id": video.id}, "views") for _ in range(10)])
        assert (await videos.get(video.id)).views == 10
        assert await videos.increment({"_id": PydanticObjectId()}, "views") is None

    @pytest.mark.asyncio
    async def test_find_sort_skip_limit(self, users):
        for name in ["carol", "alice", "bob"]:
            await users.insert(_user(name))
        names = [u.username for u in await users.find(sort=[("username", 1)])]
        assert names == ["alice", "bob", "carol"]
        page = await users.find(sort=[("username", -1)], skip=1, limit=1)
        assert [u.username for u in page] == ["bob"]

    @pytest.mark.asyncio
    async def test_delete_and_delete_one(self, users):
        alice = await users.insert(_user("alice"))
        await users.insert(_user("bob"))
        await users.delete(alice.id)
        with pytest.raises(DocumentNotFoundError):
            await users.delete(alice.id)
        assert await users.delete_one({"username": "bob"}) is True
        assert await users.delete_one({"username": "bob"}) is False

    @pytest.mark.asyncio
    async def test_concurrent_inserts_keep_one_edge(self):
        likes = MemoryODMBackend(LikeDocument, MemoryStore())
        target, liker = PydanticObjectId(), PydanticObjectId()
        results = await asyncio.gather(
            *[likes.insert(LikeDocument(kind="video", target=target, liked_by=liker)) for _ in range(5)],
            return_exceptions=True,
        )
        assert sum(not isinstance(r, Exception) for r in results) == 1
        assert all(isinstance(r, DuplicateInsertError) for r in results if isinstance(r, Exception))
        assert await likes.count() == 1

    @pytest.mark.asyncio
    async def test_backends_share_a_store_per_collection(self):
        store = MemoryStore()
        first = MemoryODMBackend(UserDocument, store)
        second = MemoryODMBackend(UserDocument, store)
        user = await first.insert(_user("alice"))
        assert (await second.get(user.id)).username == "alice"
        store.clear()
        assert await second.count() == 0
