import asyncio
from datetime import datetime, timezone

import pytest

from novel_nest.client import MockDataSource
from novel_nest.client.loaders import FetchDescriptor, ViewDataLoader, plan_view_data
from novel_nest.client.navigation import ResolvedView, View
from novel_nest.core.errors import TransportError
from novel_nest.domains.identity.schemas import Role, UserResponse

WRITER = UserResponse(
    user_id=2, username="WriterJane", email="writer@novelnest.io", role=Role.WRITER,
    created_at=datetime(2023, 2, 20, tzinfo=timezone.utc),
)


class FlakySource(MockDataSource):
    async def get_reviews_by_novel_id(self, novel_id):
        raise TransportError("down")

    async def get_novel_by_id(self, novel_id):
        raise TransportError("down")


def test_home_plan():
    plan = plan_view_data(ResolvedView(View.HOME), WRITER)

    assert [f.operation for f in plan] == ["get_recommended_novels", "get_fantasy_novels"]


def test_novel_detail_plan_is_keyed_by_id():
    plan = plan_view_data(ResolvedView(View.NOVEL_DETAIL, {"novel_id": 101}), WRITER)

    assert plan == [
        FetchDescriptor("novel", "get_novel_by_id", (101,), placeholder=plan[0].placeholder),
        FetchDescriptor("episodes", "get_episodes_by_novel_id", (101,)),
        FetchDescriptor("reviews", "get_reviews_by_novel_id", (101,)),
    ]


def test_read_episode_plan():
    plan = plan_view_data(ResolvedView(View.READ_EPISODE, {"novel_id": 101, "episode_id": 10101}), WRITER)

    assert [(f.key, f.args) for f in plan] == [
        ("episode", (101, 10101)),
        ("episodes", (101,)),
        ("comments", (10101,)),
    ]


def test_writer_dashboard_uses_current_user():
    plan = plan_view_data(ResolvedView(View.WRITER_DASHBOARD), WRITER)

    assert [(f.operation, f.args) for f in plan] == [("get_writer_novels", (2,))]


@pytest.mark.parametrize("view", [View.LOGIN, View.ADMIN_DASHBOARD, View.DEVELOPER_DASHBOARD])
def test_views_without_data(view):
    assert plan_view_data(ResolvedView(view), WRITER) == []


async def test_read_episode_loads_threaded_comments():
    loader = ViewDataLoader(MockDataSource())

    data = await loader.load(ResolvedView(View.READ_EPISODE, {"novel_id": 101, "episode_id": 10101}), WRITER)

    assert data["episode"].episode_id == 10101
    assert len(data["episodes"]) == 5
    assert [node.comment_id for node in data["comments"]] == [2, 1]
    assert [reply.comment_id for reply in data["comments"][1].replies] == [3]


async def test_failed_fetch_yields_placeholder_without_affecting_others():
    loader = ViewDataLoader(FlakySource())

    data = await loader.load(ResolvedView(View.NOVEL_DETAIL, {"novel_id": 101}), WRITER)

    assert data["novel"] is None
    assert data["reviews"] == []
    assert len(data["episodes"]) == 5


async def test_stale_results_are_discarded():
    loader = ViewDataLoader(MockDataSource(delay=0.02))

    pending = asyncio.ensure_future(loader.load(ResolvedView(View.HOME), WRITER))
    await asyncio.sleep(0)
    loader.deactivate()

    assert await pending is None
    assert loader.data == {}


async def test_newer_load_supersedes_older_one():
    loader = ViewDataLoader(MockDataSource(delay=0.02))

    first = asyncio.ensure_future(loader.load(ResolvedView(View.HOME), WRITER))
    await asyncio.sleep(0)
    second = await loader.load(ResolvedView(View.WRITER_DASHBOARD), WRITER)

    assert await first is None
    assert set(second) == {"novels"}
    assert set(loader.data) == {"novels"}
