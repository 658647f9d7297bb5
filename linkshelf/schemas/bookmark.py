"""ブックマーク関連のPydanticスキーマ

ブックマークの作成・更新ペイロードと応答スキーマを提供
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from linkshelf.core.constants import BookmarkConstants, ErrorMessages, TagConstants, normalize_tag, validate_url


class BookmarkPayload(BaseModel):
    """ブックマーク作成・更新ペイロード（更新は完全置換）

    フィールドはこの順序で検証され、最初に失敗したフィールドのメッセージが採用される
    型は厳密に検証する（bytesやsetなどは変換せずに拒否）
    """

    model_config = ConfigDict(extra="ignore", strict=True)

    url: str = Field(..., description="ブックマークURL", examples=["https://fastapi.tiangolo.com/"])

    title: str = Field(..., description="タイトル", examples=["FastAPI ドキュメント"])

    description: str | None = Field(None, description="説明", examples=["公式ドキュメント"])

    tags: list[str] | None = Field(None, description="タグ（最大5個、小文字で保存）", examples=[["python", "web"]])

    @field_validator("url")
    @classmethod
    def check_url(cls, v: str) -> str:
        if not v.strip():
            raise ValueError(ErrorMessages.URL_REQUIRED)

        if not validate_url(v):
            raise ValueError(ErrorMessages.URL_INVALID)

        return v

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError(ErrorMessages.TITLE_REQUIRED)

        if len(v) > BookmarkConstants.TITLE_MAX_LENGTH:
            raise ValueError(ErrorMessages.TITLE_TOO_LONG)

        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        if v is not None and len(v) > BookmarkConstants.DESCRIPTION_MAX_LENGTH:
            raise ValueError(ErrorMessages.DESCRIPTION_TOO_LONG)

        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return None

        if len(v) > TagConstants.MAX_TAGS_PER_BOOKMARK:
            raise ValueError(ErrorMessages.TAGS_TOO_MANY)

        if any(len(tag.strip()) < TagConstants.NAME_MIN_LENGTH for tag in v):
            raise ValueError(ErrorMessages.TAG_EMPTY)

        # 大文字・小文字を区別せずに重複チェック
        if len({tag.casefold() for tag in v}) != len(v):
            raise ValueError(ErrorMessages.TAGS_DUPLICATE)

        return [normalize_tag(tag) for tag in v]

    @property
    def normalized_tags(self) -> list[str]:
        """保存形式のタグリスト（未指定の場合は空リスト）"""
        return list(self.tags or [])


class BookmarkResponse(BaseModel):
    """ブックマーク応答スキーマ"""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int = Field(..., description="ブックマークID")
    url: str = Field(..., description="ブックマークURL")
    title: str = Field(..., description="タイトル")
    description: str | None = Field(None, description="説明")
    tags: list[str] = Field(default_factory=list, description="タグ（挿入順）")
    created_at: datetime = Field(..., serialization_alias="createdAt", description="作成日時（UTC）")


class PaginationMeta(BaseModel):
    """ページネーション情報"""

    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(..., description="現在のページ")
    limit: int = Field(..., description="1ページあたりの件数")
    total: int = Field(..., description="総件数")
    total_pages: int = Field(..., serialization_alias="totalPages", description="総ページ数")


class BookmarkListResponse(BaseModel):
    """ブックマーク一覧応答スキーマ"""

    data: list[BookmarkResponse] = Field(..., description="ブックマークリスト")
    pagination: PaginationMeta = Field(..., description="ページネーション情報")
