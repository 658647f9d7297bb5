"""ブックマークDTO

ブックマークデータの転送オブジェクト
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from linkshelf.dtos.base import BaseDTO

if TYPE_CHECKING:
    from linkshelf.models.bookmark import Bookmark


def ensure_utc(value: datetime) -> datetime:
    """タイムゾーン情報のない日時（SQLite）をUTCとして扱う"""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@dataclass(frozen=True)
class BookmarkDTO(BaseDTO):
    """ブックマークDTO

    タグは挿入順の小文字文字列リスト（タグなしの場合は空リスト）
    """

    url: str
    title: str
    description: str | None
    tags: list[str]

    @classmethod
    def from_model(cls, bookmark: "Bookmark", tags: list[str]) -> "BookmarkDTO":
        """モデルとタグリストからDTOを生成（セッション内で呼び出すこと）"""
        return cls(
            id=bookmark.id,
            created_at=ensure_utc(bookmark.created_at),
            url=bookmark.url,
            title=bookmark.title,
            description=bookmark.description,
            tags=list(tags),
        )


@dataclass(frozen=True)
class BookmarkPageDTO:
    """ブックマーク一覧DTO

    ページネーション情報とブックマークリストを含む
    """

    items: list[BookmarkDTO]
    total: int
    page: int
    per_page: int
    total_pages: int
