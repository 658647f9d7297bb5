"""ブックマークモデル

保存したURLとそのメタデータを管理
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from linkshelf.core.constants import BookmarkConstants
from linkshelf.models.base import Base

# 循環インポート回避のための型チェック時
if TYPE_CHECKING:
    from linkshelf.models.bookmark_tag import BookmarkTag  # noqa: F401


class Bookmark(Base):
    """ブックマークモデル

    - URL・タイトル・説明
    - 作成日時（作成時に一度だけ設定、更新では変更しない）
    - タグとの一対多関係（ブックマーク削除時にカスケード削除）
    """

    url: Mapped[str] = mapped_column(Text, nullable=False, comment="ブックマークURL")

    title: Mapped[str] = mapped_column(
        String(BookmarkConstants.TITLE_MAX_LENGTH), nullable=False, comment="ブックマークタイトル"
    )

    description: Mapped[str | None] = mapped_column(
        String(BookmarkConstants.DESCRIPTION_MAX_LENGTH), nullable=True, comment="ブックマークの説明"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False, comment="作成日時（UTC）"
    )

    # リレーション定義（一覧取得時はバッチで読み込むため、デフォルトは遅延読み込み）
    tags: Mapped[list["BookmarkTag"]] = relationship(
        "BookmarkTag",
        back_populates="bookmark",
        cascade="all, delete-orphan",
        lazy="select",
        passive_deletes=True,
        order_by="BookmarkTag.id",
    )

    __table_args__ = (
        # 一覧の並び順（作成日時降順、同時刻はID降順）用
        Index("ix_bookmarks_created_at_id", "created_at", "id"),
        # 削除済みIDを再利用させない
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Bookmark(id={self.id}, title={self.title!r})>"
