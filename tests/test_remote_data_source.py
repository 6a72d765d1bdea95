import httpx
import pytest

from novel_nest.client import MockDataSource, RemoteDataSource
from novel_nest.client.remote import error_for_status
from novel_nest.client.session import SessionManager
from novel_nest.core.errors import (
    AuthorizationError, ConflictError, NotFoundError, TransportError
)
from novel_nest.domains.identity.schemas import Role


@pytest.fixture
def remote(client):
    return RemoteDataSource("http://testserver", client=client)


def _stub(handler) -> RemoteDataSource:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://backend")
    return RemoteDataSource("http://backend", client=client)


async def test_login_returns_user_and_keeps_token(remote):
    user = await remote.login("writer@novelnest.io", "novelnest123")

    assert user.user_id == 2
    assert user.role == Role.WRITER
    assert remote.access_token


async def test_login_with_wrong_password_is_not_found(remote):
    with pytest.raises(NotFoundError):
        await remote.login("writer@novelnest.io", "wrong-password1")
    assert remote.access_token is None


async def test_signup_and_conflict(remote):
    user = await remote.signup("Newbie", "newbie@novelnest.io", "secret123")
    assert user.role == Role.READER

    with pytest.raises(ConflictError):
        await remote.signup("Newbie", "other@novelnest.io", "secret123")


async def test_listings_match_mock_ordering(client):
    remote = RemoteDataSource("http://testserver", page_size=6, client=client)
    mock = MockDataSource(page_size=6)

    assert [n.novel_id for n in await remote.get_recommended_novels()] == \
        [n.novel_id for n in await mock.get_recommended_novels()]
    assert [n.novel_id for n in await remote.get_fantasy_novels()] == \
        [n.novel_id for n in await mock.get_fantasy_novels()]


async def test_reads_by_id(remote):
    novel = await remote.get_novel_by_id(101)

    assert novel.title == "The Crimson Cipher 1"
    assert novel.author.username == "WriterJane"
    assert await remote.get_novel_by_id(999) is None


async def test_episode_belongs_to_novel(remote):
    episodes = await remote.get_episodes_by_novel_id(101)

    assert [e.episode_id for e in episodes] == [10101, 10102, 10103, 10104, 10105]
    assert (await remote.get_episode(101, 10102)).title.startswith("Chapter 2")
    assert await remote.get_episode(102, 10101) is None


async def test_reviews_comments_and_writer_novels(remote):
    assert [r.review_id for r in await remote.get_reviews_by_novel_id(101)] == [2, 1]

    comments = await remote.get_comments_by_episode_id(10101)
    assert [c.comment_id for c in comments] == [2, 1, 3]
    assert comments[2].parent_comment_id == 1

    assert len(await remote.get_writer_novels(2)) == 12
    assert await remote.get_writer_novels(1) == []


@pytest.mark.parametrize("status_code, error", [
    (404, NotFoundError),
    (400, ConflictError),
    (409, ConflictError),
    (422, ConflictError),
    (401, AuthorizationError),
    (403, AuthorizationError),
    (500, TransportError),
    (503, TransportError),
])
def test_error_for_status(status_code, error):
    assert type(error_for_status(status_code, "boom")) is error


async def test_server_error_message_is_kept():
    source = _stub(lambda request: httpx.Response(409, json={"error": "Username taken"}))

    with pytest.raises(ConflictError, match="Username taken"):
        await source.signup("Joe", "joe@novelnest.io", "secret123")
    await source.aclose()


async def test_server_failure_becomes_transport_error():
    source = _stub(lambda request: httpx.Response(500, text="<html>oops</html>"))

    with pytest.raises(TransportError):
        await source.get_recommended_novels()
    await source.aclose()


async def test_connection_failure_becomes_transport_error():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    source = _stub(refuse)

    with pytest.raises(TransportError):
        await source.get_novel_by_id(101)
    await source.aclose()


async def test_malformed_payloads_become_transport_errors():
    source = _stub(lambda request: httpx.Response(200, text="not json"))
    with pytest.raises(TransportError):
        await source.get_reviews_by_novel_id(101)
    await source.aclose()

    source = _stub(lambda request: httpx.Response(200, json=[{"novel_id": "abc"}]))
    with pytest.raises(TransportError):
        await source.get_writer_novels(2)
    await source.aclose()


async def test_token_is_sent_after_login():
    seen = []

    def handler(request):
        seen.append(request.headers.get("Authorization"))
        if request.url.path == "/api/auth/login":
            return httpx.Response(200, json={
                "user": {
                    "user_id": 1, "username": "ReaderJoe", "email": "reader@novelnest.io",
                    "role": "Reader", "created_at": "2023-01-15T09:30:00Z",
                },
                "access_token": "token-1",
            })
        return httpx.Response(200, json=[])

    source = _stub(handler)
    await source.login("reader@novelnest.io", "secret123")
    await source.get_writer_novels(1)
    await source.aclose()

    assert seen == [None, "Bearer token-1"]


async def test_writer_novels_order_matches_mock(remote):
    remote_ids = [n.novel_id for n in await remote.get_writer_novels(2)]
    mock_ids = [n.novel_id for n in await MockDataSource().get_writer_novels(2)]

    assert remote_ids == mock_ids


async def test_logout_drops_bearer_token(remote):
    session = SessionManager(remote)

    assert await session.login("writer@novelnest.io", "novelnest123") is not None
    assert remote.access_token

    session.logout()

    assert remote.access_token is None
