from tests.conftest import auth_headers


async def test_list_defaults_to_page_size_by_views(client):
    response = await client.get("/api/novels")

    assert response.status_code == 200
    novels = response.json()
    assert len(novels) == 12
    views = [n["views"] for n in novels]
    assert views == sorted(views, reverse=True)


async def test_list_by_tag_and_likes(client):
    response = await client.get("/api/novels", params={"tag": "Romance", "sort": "likes", "limit": 6})

    novels = response.json()
    assert {n["novel_id"] for n in novels} == {104, 108, 112}
    assert all("Romance" in n["tags"] for n in novels)
    likes = [n["likes"] for n in novels]
    assert likes == sorted(likes, reverse=True)


async def test_list_rejects_unknown_sort(client):
    response = await client.get("/api/novels", params={"sort": "title"})

    assert response.status_code == 422


async def test_novel_detail_and_missing(client):
    response = await client.get("/api/novels/101")
    assert response.status_code == 200
    assert response.json()["author"]["username"] == "WriterJane"

    response = await client.get("/api/novels/999")
    assert response.status_code == 404
    assert response.json() == {"error": "Novel not found"}


async def test_episode_lookup_is_scoped_to_novel(client):
    assert (await client.get("/api/novels/101/episodes/10101")).status_code == 200
    assert (await client.get("/api/novels/102/episodes/10101")).status_code == 404


async def test_only_writers_create_novels(client):
    payload = {"title": "  Moonlit Harbor ", "description": "Sea stories", "tags": ["Fantasy", "Sea", "Sea"]}

    reader = await auth_headers(client, "reader@novelnest.io")
    response = await client.post("/api/novels", json=payload, headers=reader)
    assert response.status_code == 403

    writer = await auth_headers(client, "writer@novelnest.io")
    response = await client.post("/api/novels", json=payload, headers=writer)
    assert response.status_code == 201
    novel = response.json()
    assert novel["title"] == "Moonlit Harbor"
    assert novel["tags"] == ["Fantasy", "Sea"]
    assert novel["author"]["user_id"] == 2

    fantasy = await client.get("/api/novels", params={"tag": "Sea"})
    assert [n["novel_id"] for n in fantasy.json()] == [novel["novel_id"]]


async def test_publish_episode_by_author_only(client):
    payload = {"title": "Chapter 6: Epilogue", "content": "The end."}

    reader = await auth_headers(client, "reader@novelnest.io")
    assert (await client.post("/api/novels/101/episodes", json=payload, headers=reader)).status_code == 403

    writer = await auth_headers(client, "writer@novelnest.io")
    response = await client.post("/api/novels/101/episodes", json=payload, headers=writer)
    assert response.status_code == 201
    assert response.json()["novel_id"] == 101

    episodes = (await client.get("/api/novels/101/episodes")).json()
    assert episodes[-1]["title"] == "Chapter 6: Epilogue"

    by_update = (await client.get("/api/novels", params={"sort": "last_update", "limit": 1})).json()
    assert by_update[0]["novel_id"] == 101


async def test_review_recomputes_rating(client):
    headers = await auth_headers(client, "fangirl@novelnest.io")

    response = await client.post("/api/novels/101/reviews", json={"rating": 3, "comment": "Decent"}, headers=headers)
    assert response.status_code == 201
    assert response.json()["user"]["username"] == "FanGirl"

    novel = (await client.get("/api/novels/101")).json()
    assert novel["rating"] == 4.0

    reviews = (await client.get("/api/novels/101/reviews")).json()
    assert reviews[0]["comment"] == "Decent"


async def test_review_rating_bounds(client):
    headers = await auth_headers(client, "fangirl@novelnest.io")

    response = await client.post("/api/novels/101/reviews", json={"rating": 6}, headers=headers)

    assert response.status_code == 422


async def test_like(client):
    headers = await auth_headers(client, "reader@novelnest.io")
    before = (await client.get("/api/novels/101")).json()["likes"]

    response = await client.post("/api/novels/101/like", headers=headers)

    assert response.status_code == 200
    assert response.json()["likes"] == before + 1
    assert (await client.post("/api/novels/999/like", headers=headers)).status_code == 404


async def test_comments_and_replies(client):
    headers = await auth_headers(client, "carl@novelnest.io")

    response = await client.post(
        "/api/episodes/10101/comments",
        json={"content": "Agreed!", "parent_comment_id": 3},
        headers=headers
    )
    assert response.status_code == 201
    reply_id = response.json()["comment_id"]

    tree = (await client.get("/api/episodes/10101/comments/tree")).json()
    assert [node["comment_id"] for node in tree] == [2, 1]
    nested = tree[1]["replies"][0]
    assert nested["comment_id"] == 3
    assert [r["comment_id"] for r in nested["replies"]] == [reply_id]


async def test_reply_must_stay_in_episode(client):
    headers = await auth_headers(client, "carl@novelnest.io")

    cross = await client.post(
        "/api/episodes/10102/comments",
        json={"content": "Wrong thread", "parent_comment_id": 1},
        headers=headers
    )
    missing_episode = await client.post("/api/episodes/99999/comments", json={"content": "Hi"}, headers=headers)

    assert cross.status_code == 404
    assert missing_episode.status_code == 404
    assert (await client.get("/api/episodes/10102/comments")).json() == []


async def test_delete_requires_author_or_admin(client):
    reader = await auth_headers(client, "reader@novelnest.io")
    assert (await client.delete("/api/novels/101", headers=reader)).status_code == 403

    admin = await auth_headers(client, "admin@novelnest.io")
    assert (await client.delete("/api/novels/101", headers=admin)).status_code == 204

    assert (await client.get("/api/novels/101")).status_code == 404
    assert (await client.get("/api/novels/101/episodes")).json() == []
    assert (await client.get("/api/novels/101/reviews")).json() == []
    assert (await client.get("/api/episodes/10101/comments")).json() == []
    assert (await client.delete("/api/novels/101", headers=admin)).status_code == 404


async def test_writer_novels_endpoint(client):
    assert len((await client.get("/api/users/2/novels")).json()) == 12
    assert (await client.get("/api/users/1/novels")).json() == []


async def test_out_of_range_ids_are_rejected_before_the_database(client):
    for url in ("/api/novels/99999999999999999999", "/api/novels/2147483648/episodes", "/api/users/0"):
        response = await client.get(url)
        assert response.status_code == 422, url
        assert isinstance(response.json()["error"], str)
