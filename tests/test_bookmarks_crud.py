"""ブックマークAPI基本動作テスト

HTTPエンドポイント経由の作成・取得・更新・削除・一覧とエラー応答のテスト
"""

from typing import Any

import pytest
from httpx import AsyncClient

from linkshelf.core.constants import ErrorMessages
from linkshelf.core.database import DatabaseManager
from linkshelf.dtos.bookmark import BookmarkDTO

BASE_URL = "/api/v1/bookmarks"


class TestBookmarkCreate:
    """ブックマーク作成テスト"""

    @pytest.mark.asyncio
    async def test_create_bookmark_success(
        self, async_client: AsyncClient, sample_bookmark_data: dict[str, Any]
    ) -> None:
        """正常なブックマーク作成"""
        response = await async_client.post(f"{BASE_URL}/", json=sample_bookmark_data)

        assert response.status_code == 201
        data = response.json()
        assert data["url"] == sample_bookmark_data["url"]
        assert data["title"] == sample_bookmark_data["title"]
        assert data["description"] == sample_bookmark_data["description"]
        assert data["tags"] == ["python", "web"]
        assert isinstance(data["id"], int)
        assert "createdAt" in data

    @pytest.mark.asyncio
    async def test_create_bookmark_invalid_url(
        self, async_client: AsyncClient, sample_bookmark_data: dict[str, Any]
    ) -> None:
        """無効なURLでの作成エラー"""
        sample_bookmark_data["url"] = "not a url"

        response = await async_client.post(f"{BASE_URL}/", json=sample_bookmark_data)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "http_error"
        assert data["message"] == ErrorMessages.URL_INVALID
        assert data["status_code"] == 400
        assert data["path"] == f"{BASE_URL}/"

    @pytest.mark.asyncio
    async def test_create_bookmark_too_many_tags(
        self, async_client: AsyncClient, sample_bookmark_data: dict[str, Any]
    ) -> None:
        """タグ6個での作成エラー"""
        sample_bookmark_data["tags"] = ["a", "b", "c", "d", "e", "f"]

        response = await async_client.post(f"{BASE_URL}/", json=sample_bookmark_data)

        assert response.status_code == 400
        assert response.json()["message"] == ErrorMessages.TAGS_TOO_MANY

    @pytest.mark.asyncio
    async def test_create_bookmark_non_object_body(self, async_client: AsyncClient) -> None:
        """オブジェクト以外のボディは400"""
        response = await async_client.post(f"{BASE_URL}/", json=["https://example.com"])

        assert response.status_code == 400
        assert response.json()["message"] == ErrorMessages.PAYLOAD_INVALID

    @pytest.mark.asyncio
    async def test_create_bookmark_malformed_json(self, async_client: AsyncClient) -> None:
        """不正なJSONは422"""
        response = await async_client.post(
            f"{BASE_URL}/", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"


class TestBookmarkRead:
    """ブックマーク取得テスト"""

    @pytest.mark.asyncio
    async def test_get_bookmark_by_id_success(self, async_client: AsyncClient, test_bookmark: BookmarkDTO) -> None:
        """特定ブックマーク取得成功"""
        response = await async_client.get(f"{BASE_URL}/{test_bookmark.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == test_bookmark.id
        assert data["title"] == test_bookmark.title
        assert data["tags"] == ["python", "web"]

    @pytest.mark.asyncio
    async def test_get_bookmark_not_found(self, async_client: AsyncClient) -> None:
        """存在しないブックマークは404"""
        response = await async_client.get(f"{BASE_URL}/9999")

        assert response.status_code == 404
        data = response.json()
        assert data["message"] == ErrorMessages.BOOKMARK_NOT_FOUND
        assert data["status_code"] == 404

    @pytest.mark.asyncio
    async def test_get_bookmark_invalid_id(self, async_client: AsyncClient) -> None:
        """整数でないIDは422"""
        response = await async_client.get(f"{BASE_URL}/abc")

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_list_bookmarks(self, async_client: AsyncClient, bulk_bookmarks: list[BookmarkDTO]) -> None:
        """一覧はdataとpaginationを返す"""
        response = await async_client.get(f"{BASE_URL}/", params={"limit": 5})

        assert response.status_code == 200
        data = response.json()
        assert len(data["data"]) == 5
        assert data["pagination"] == {"page": 1, "limit": 5, "total": 12, "totalPages": 3}
        assert data["data"][0]["id"] == bulk_bookmarks[-1].id

    @pytest.mark.asyncio
    async def test_list_bookmarks_defaults(self, async_client: AsyncClient, bulk_bookmarks: list[BookmarkDTO]) -> None:
        response = await async_client.get(f"{BASE_URL}/")

        assert response.status_code == 200
        assert response.json()["pagination"] == {"page": 1, "limit": 10, "total": 12, "totalPages": 2}

    @pytest.mark.asyncio
    async def test_list_bookmarks_by_tag(self, async_client: AsyncClient, bulk_bookmarks: list[BookmarkDTO]) -> None:
        """タグで絞り込み"""
        response = await async_client.get(f"{BASE_URL}/", params={"tag": "Even", "page": 2, "limit": 5})

        assert response.status_code == 200
        data = response.json()
        assert len(data["data"]) == 1
        assert data["pagination"]["total"] == 6
        assert all("even" in item["tags"] for item in data["data"])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 101}])
    async def test_list_bookmarks_invalid_window(self, async_client: AsyncClient, params: dict[str, int]) -> None:
        """不正なページ指定は400"""
        response = await async_client.get(f"{BASE_URL}/", params=params)

        assert response.status_code == 400
        assert response.json()["error"] == "http_error"

    @pytest.mark.asyncio
    async def test_list_bookmarks_far_page(self, async_client: AsyncClient, bulk_bookmarks: list[BookmarkDTO]) -> None:
        """非常に大きなページ番号は空の一覧を返す"""
        response = await async_client.get(f"{BASE_URL}/", params={"page": 10**17, "limit": 5})

        assert response.status_code == 200
        data = response.json()
        assert data["data"] == []
        assert data["pagination"] == {"page": 10**17, "limit": 5, "total": 12, "totalPages": 3}


class TestBookmarkUpdate:
    """ブックマーク更新テスト"""

    @pytest.mark.asyncio
    async def test_update_bookmark_success(
        self, async_client: AsyncClient, test_bookmark: BookmarkDTO, sample_update_data: dict[str, Any]
    ) -> None:
        """更新成功（作成日時は変わらない）"""
        original = (await async_client.get(f"{BASE_URL}/{test_bookmark.id}")).json()

        response = await async_client.put(f"{BASE_URL}/{test_bookmark.id}", json=sample_update_data)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == test_bookmark.id
        assert data["url"] == sample_update_data["url"]
        assert data["title"] == sample_update_data["title"]
        assert data["description"] is None
        assert data["tags"] == ["docs", "reference", "python"]
        assert data["createdAt"] == original["createdAt"]

        fetched = (await async_client.get(f"{BASE_URL}/{test_bookmark.id}")).json()
        assert fetched == data

    @pytest.mark.asyncio
    async def test_update_bookmark_not_found(
        self, async_client: AsyncClient, sample_update_data: dict[str, Any]
    ) -> None:
        response = await async_client.put(f"{BASE_URL}/9999", json=sample_update_data)

        assert response.status_code == 404
        assert response.json()["message"] == ErrorMessages.BOOKMARK_NOT_FOUND

    @pytest.mark.asyncio
    async def test_update_bookmark_invalid(self, async_client: AsyncClient, test_bookmark: BookmarkDTO) -> None:
        """検証エラーは存在確認より先に判定される"""
        response = await async_client.put(f"{BASE_URL}/9999", json={"url": "https://example.com", "title": "t" * 201})

        assert response.status_code == 400
        assert response.json()["message"] == ErrorMessages.TITLE_TOO_LONG


class TestBookmarkDelete:
    """ブックマーク削除テスト"""

    @pytest.mark.asyncio
    async def test_delete_bookmark_success(self, async_client: AsyncClient, test_bookmark: BookmarkDTO) -> None:
        response = await async_client.delete(f"{BASE_URL}/{test_bookmark.id}")

        assert response.status_code == 204
        assert response.content == b""

        response = await async_client.get(f"{BASE_URL}/{test_bookmark.id}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_bookmark_not_found(self, async_client: AsyncClient) -> None:
        response = await async_client.delete(f"{BASE_URL}/9999")

        assert response.status_code == 404


class TestErrorResponses:
    """障害時の応答テスト"""

    @pytest.mark.asyncio
    async def test_storage_fault_returns_generic_500(
        self, async_client: AsyncClient, database: DatabaseManager, sample_bookmark_data: dict[str, Any]
    ) -> None:
        """データベース障害は内部情報を含まない500"""
        await database.drop_tables()

        response = await async_client.post(f"{BASE_URL}/", json=sample_bookmark_data)

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "storage_error"
        assert data["message"] == ErrorMessages.STORAGE_ERROR
        assert "bookmarks" not in data["message"]

    @pytest.mark.asyncio
    async def test_health_check(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["services"]["database"]["database"] == "connected"
        assert "path" not in data["services"]["database"]
