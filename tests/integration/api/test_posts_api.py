"""Tests for post, like and comment endpoints."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from infrastructure.auth.jwt_provider import JWTAuthProvider


def _user_id(auth_provider: JWTAuthProvider, headers: dict[str, str]) -> str:
    return str(auth_provider.decode_token(headers["Authorization"].split()[1]))


async def _create_post(client: AsyncClient, headers: dict[str, str], text: str = "hello") -> dict:
    response = await client.post("/api/posts", json={"text": text}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


class TestPosts:
    @pytest.mark.asyncio
    async def test_create_post_snapshots_author(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        auth_provider: JWTAuthProvider,
    ) -> None:
        post = await _create_post(client, auth_headers)

        assert post["text"] == "hello"
        assert post["name"] == "Ada Lovelace"
        assert post["avatar"].startswith("https://www.gravatar.com/avatar/")
        assert post["user_id"] == _user_id(auth_provider, auth_headers)
        assert post["likes"] == []
        assert post["comments"] == []

    @pytest.mark.asyncio
    async def test_empty_text_is_rejected(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.post("/api/posts", json={"text": "   "}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "body.text"

    @pytest.mark.asyncio
    async def test_list_is_newest_first(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        for text in ("first", "second", "third"):
            await _create_post(client, auth_headers, text)

        response = await client.get("/api/posts", headers=auth_headers)

        assert response.status_code == 200
        assert [p["text"] for p in response.json()] == ["third", "second", "first"]

    @pytest.mark.asyncio
    async def test_list_requires_authentication(self, client: AsyncClient) -> None:
        response = await client.get("/api/posts")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_get_by_id(self, client: AsyncClient, auth_headers: dict[str, str]) -> None:
        post = await _create_post(client, auth_headers)

        response = await client.get(f"/api/posts/{post['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["id"] == post["id"]

    @pytest.mark.asyncio
    async def test_get_unknown_post(self, client: AsyncClient, auth_headers: dict[str, str]) -> None:
        response = await client.get(f"/api/posts/{uuid4()}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error_code"] == "POST_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_author_deletes_post(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        post = await _create_post(client, auth_headers)

        response = await client.delete(f"/api/posts/{post['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Post removed"}
        gone = await client.get(f"/api/posts/{post['id']}", headers=auth_headers)
        assert gone.status_code == 404

    @pytest.mark.asyncio
    async def test_non_author_cannot_delete(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        other_headers: dict[str, str],
    ) -> None:
        post = await _create_post(client, auth_headers)

        response = await client.delete(f"/api/posts/{post['id']}", headers=other_headers)

        assert response.status_code == 401
        assert response.json()["message"] == "User not authorized"
        still_there = await client.get(f"/api/posts/{post['id']}", headers=auth_headers)
        assert still_there.status_code == 200

    @pytest.mark.asyncio
    async def test_delete_unknown_post(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.delete(f"/api/posts/{uuid4()}", headers=auth_headers)

        assert response.status_code == 404


class TestLikes:
    @pytest.mark.asyncio
    async def test_like_and_unlike(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        other_headers: dict[str, str],
        auth_provider: JWTAuthProvider,
    ) -> None:
        post = await _create_post(client, auth_headers)

        liked = await client.put(f"/api/posts/like/{post['id']}", headers=other_headers)

        assert liked.status_code == 200
        assert liked.json() == [{"user_id": _user_id(auth_provider, other_headers)}]

        unliked = await client.put(f"/api/posts/unlike/{post['id']}", headers=other_headers)

        assert unliked.status_code == 200
        assert unliked.json() == []

    @pytest.mark.asyncio
    async def test_likes_are_newest_first(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        other_headers: dict[str, str],
        auth_provider: JWTAuthProvider,
    ) -> None:
        post = await _create_post(client, auth_headers)

        await client.put(f"/api/posts/like/{post['id']}", headers=auth_headers)
        response = await client.put(f"/api/posts/like/{post['id']}", headers=other_headers)

        assert [like["user_id"] for like in response.json()] == [
            _user_id(auth_provider, other_headers),
            _user_id(auth_provider, auth_headers),
        ]

    @pytest.mark.asyncio
    async def test_like_twice_is_conflict(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        post = await _create_post(client, auth_headers)
        await client.put(f"/api/posts/like/{post['id']}", headers=auth_headers)

        response = await client.put(f"/api/posts/like/{post['id']}", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Post already liked"

    @pytest.mark.asyncio
    async def test_unlike_never_liked_is_conflict(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        post = await _create_post(client, auth_headers)

        response = await client.put(f"/api/posts/unlike/{post['id']}", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Post has not yet been liked"

    @pytest.mark.asyncio
    async def test_like_unknown_post(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.put(f"/api/posts/like/{uuid4()}", headers=auth_headers)

        assert response.status_code == 404


class TestComments:
    @pytest.mark.asyncio
    async def test_add_comment_prepends(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        other_headers: dict[str, str],
    ) -> None:
        post = await _create_post(client, auth_headers)

        await client.post(
            f"/api/posts/comment/{post['id']}", json={"text": "first"}, headers=auth_headers
        )
        response = await client.post(
            f"/api/posts/comment/{post['id']}", json={"text": "second"}, headers=other_headers
        )

        assert response.status_code == 200
        comments = response.json()
        assert [c["text"] for c in comments] == ["second", "first"]
        assert comments[0]["name"] == "Grace Hopper"

    @pytest.mark.asyncio
    async def test_empty_comment_is_rejected(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        post = await _create_post(client, auth_headers)

        response = await client.post(
            f"/api/posts/comment/{post['id']}", json={"text": ""}, headers=auth_headers
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_own_comment_keeps_others(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        other_headers: dict[str, str],
    ) -> None:
        post = await _create_post(client, auth_headers)
        mine = await client.post(
            f"/api/posts/comment/{post['id']}", json={"text": "mine"}, headers=other_headers
        )
        mine_id = mine.json()[0]["id"]
        await client.post(
            f"/api/posts/comment/{post['id']}", json={"text": "theirs"}, headers=auth_headers
        )

        response = await client.delete(
            f"/api/posts/comment/{post['id']}/{mine_id}", headers=other_headers
        )

        assert response.status_code == 200
        assert [c["text"] for c in response.json()] == ["theirs"]

    @pytest.mark.asyncio
    async def test_cannot_delete_others_comment(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        other_headers: dict[str, str],
    ) -> None:
        post = await _create_post(client, auth_headers)
        added = await client.post(
            f"/api/posts/comment/{post['id']}", json={"text": "mine"}, headers=auth_headers
        )
        comment_id = added.json()[0]["id"]

        response = await client.delete(
            f"/api/posts/comment/{post['id']}/{comment_id}", headers=other_headers
        )

        assert response.status_code == 401
        fetched = await client.get(f"/api/posts/{post['id']}", headers=auth_headers)
        assert len(fetched.json()["comments"]) == 1

    @pytest.mark.asyncio
    async def test_delete_unknown_comment(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        post = await _create_post(client, auth_headers)

        response = await client.delete(
            f"/api/posts/comment/{post['id']}/{uuid4()}", headers=auth_headers
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Comment does not exist"
