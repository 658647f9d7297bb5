"""ブックマーク一覧クエリ

タグ絞り込み・ページネーション付きの読み取り処理を提供
"""

from abc import ABC, abstractmethod

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from linkshelf.core.constants import APIConstants, normalize_tag
from linkshelf.dtos.bookmark import BookmarkDTO, BookmarkPageDTO
from linkshelf.models.bookmark import Bookmark
from linkshelf.models.bookmark_tag import BookmarkTag
from linkshelf.utils.error_handler import handle_db_operation
from linkshelf.utils.pagination import create_pagination_result


class BookmarkQueryEngineInterface(ABC):
    """ブックマーク一覧クエリのインターフェース"""

    @abstractmethod
    async def get_list(
        self,
        db: AsyncSession,
        *,
        tag: str | None = None,
        skip: int = 0,
        limit: int = APIConstants.DEFAULT_PAGE_SIZE,
    ) -> BookmarkPageDTO:
        """ブックマーク一覧を取得"""
        pass


class BookmarkQueryEngine(BookmarkQueryEngineInterface):
    """ブックマーク一覧クエリの実装"""

    @handle_db_operation("ブックマーク一覧取得")
    async def get_list(
        self,
        db: AsyncSession,
        *,
        tag: str | None = None,
        skip: int = 0,
        limit: int = APIConstants.DEFAULT_PAGE_SIZE,
    ) -> BookmarkPageDTO:
        """ブックマーク一覧を取得

        件数と一覧は同一セッション内で取得し、タグはバッチで読み込む
        """
        stmt = self._apply_tag_filter(select(Bookmark), tag)

        # 総件数取得（ページ範囲とは独立）
        count_stmt = select(func.count()).select_from(stmt.subquery())
        total_result = await db.execute(count_stmt)
        total = total_result.scalar() or 0

        pagination = create_pagination_result(page=(skip // limit) + 1, per_page=limit, total=total)

        # 範囲外のページは一覧を取得しない（OFFSETがINTEGERの範囲を超えうる）
        if skip >= total:
            return BookmarkPageDTO(
                items=[],
                total=pagination.total,
                page=pagination.page,
                per_page=pagination.per_page,
                total_pages=pagination.total_pages,
            )

        # 作成日時降順、同時刻はID降順
        stmt = stmt.order_by(Bookmark.created_at.desc(), Bookmark.id.desc()).offset(skip).limit(limit)

        result = await db.execute(stmt)
        bookmarks = list(result.scalars().all())

        bookmark_tags_map = await self._get_tags_for_bookmarks(db, [bookmark.id for bookmark in bookmarks])
        items = [BookmarkDTO.from_model(bookmark, bookmark_tags_map[bookmark.id]) for bookmark in bookmarks]

        return BookmarkPageDTO(
            items=items,
            total=pagination.total,
            page=pagination.page,
            per_page=pagination.per_page,
            total_pages=pagination.total_pages,
        )

    def _apply_tag_filter(self, stmt: Select[tuple[Bookmark]], tag: str | None) -> Select[tuple[Bookmark]]:
        """タグ絞り込み条件を適用（空文字は絞り込みなし）"""
        if not tag:
            return stmt

        tagged_ids = select(BookmarkTag.bookmark_id).where(BookmarkTag.tag == normalize_tag(tag))
        return stmt.where(Bookmark.id.in_(tagged_ids))

    async def _get_tags_for_bookmarks(self, db: AsyncSession, bookmark_ids: list[int]) -> dict[int, list[str]]:
        """複数ブックマークのタグを効率的にバッチ取得"""
        if not bookmark_ids:
            return {}

        stmt = (
            select(BookmarkTag.bookmark_id, BookmarkTag.tag)
            .where(BookmarkTag.bookmark_id.in_(bookmark_ids))
            .order_by(BookmarkTag.bookmark_id, BookmarkTag.id)
        )

        result = await db.execute(stmt)

        # 存在しないブックマークIDには空リストを設定
        bookmark_tags_map: dict[int, list[str]] = {bookmark_id: [] for bookmark_id in bookmark_ids}
        for bookmark_id, tag in result.all():
            bookmark_tags_map[bookmark_id].append(tag)

        return bookmark_tags_map


bookmark_query_engine = BookmarkQueryEngine()
