"""ブックマーク-タグ関連モデル

ブックマークとタグ文字列の関連を1行ずつ管理
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from linkshelf.models.base import Base

# 循環インポート回避のための型チェック時
if TYPE_CHECKING:
    from linkshelf.models.bookmark import Bookmark  # noqa: F401


class BookmarkTag(Base):
    """ブックマーク-タグ関連モデル

    - タグは小文字に正規化して保存
    - 同一ブックマーク内での重複を防止
    - ブックマーク削除時にカスケード削除
    """

    bookmark_id: Mapped[int] = mapped_column(
        ForeignKey("bookmarks.id", ondelete="CASCADE"), nullable=False, comment="関連付けるブックマークID"
    )

    tag: Mapped[str] = mapped_column(Text, nullable=False, comment="タグ（小文字）")

    bookmark: Mapped["Bookmark"] = relationship("Bookmark", back_populates="tags", lazy="select")

    __table_args__ = (
        UniqueConstraint("bookmark_id", "tag", name="uq_bookmark_tags_bookmark_tag"),
        Index("ix_bookmark_tags_bookmark_id", "bookmark_id"),
        Index("ix_bookmark_tags_tag", "tag"),
        {"sqlite_autoincrement": True},
    )

    @classmethod
    def create_association(cls, bookmark_id: int, tag: str) -> "BookmarkTag":
        """ブックマークとタグの関連付けを作成

        Args:
            bookmark_id: ブックマークID
            tag: 正規化済みのタグ

        Returns:
            BookmarkTagインスタンス
        """
        return cls(bookmark_id=bookmark_id, tag=tag)

    def __repr__(self) -> str:
        return f"<BookmarkTag(bookmark_id={self.bookmark_id}, tag={self.tag!r})>"
