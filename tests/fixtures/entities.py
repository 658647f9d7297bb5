"""テストエンティティフィクスチャ"""

from typing import Any

import pytest_asyncio

from linkshelf.dtos.bookmark import BookmarkDTO
from linkshelf.repositories.bookmark import BookmarkRepository
from linkshelf.utils.result import Ok

# 一覧テスト用のブックマーク件数
BULK_BOOKMARK_COUNT = 12


@pytest_asyncio.fixture
async def test_bookmark(repository: BookmarkRepository) -> BookmarkDTO:
    """テスト用ブックマーク作成"""
    result = await repository.create(
        {
            "url": "https://fastapi.tiangolo.com/",
            "title": "FastAPI",
            "description": "テスト用のブックマークです",
            "tags": ["Python", "Web"],
        }
    )
    assert isinstance(result, Ok)

    return result.value


@pytest_asyncio.fixture
async def bulk_bookmarks(repository: BookmarkRepository) -> list[BookmarkDTO]:
    """一覧・ページネーションテスト用ブックマーク作成

    偶数番目に "even" タグ、全件に "bulk" タグを付与する（作成順で返す）
    """
    bookmarks: list[BookmarkDTO] = []

    for index in range(BULK_BOOKMARK_COUNT):
        tags = ["bulk", "even"] if index % 2 == 0 else ["bulk"]
        candidate: dict[str, Any] = {
            "url": f"https://example.com/bulk/{index}",
            "title": f"一括ブックマーク{index}",
            "tags": tags,
        }
        result = await repository.create(candidate)
        assert isinstance(result, Ok)
        bookmarks.append(result.value)

    return bookmarks
