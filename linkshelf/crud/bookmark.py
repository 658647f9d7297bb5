"""ブックマークCRUDクラス

ブックマークとタグ関連の書き込み・単体取得を提供
各メソッドはflushまでを行い、コミット/ロールバックはトランザクション境界に委ねる
"""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from linkshelf.crud.base import CRUDBase
from linkshelf.dtos.bookmark import BookmarkDTO, ensure_utc
from linkshelf.models.bookmark import Bookmark
from linkshelf.models.bookmark_tag import BookmarkTag
from linkshelf.schemas.bookmark import BookmarkPayload
from linkshelf.utils.error_handler import handle_db_operation

logger = logging.getLogger(__name__)


class CRUDBookmark(CRUDBase[Bookmark]):
    @handle_db_operation("タグ付きブックマーク作成")
    async def create_with_tags(self, db: AsyncSession, *, bookmark_in: BookmarkPayload) -> BookmarkDTO:
        """ブックマークをタグと一緒に作成"""
        db_bookmark = self.model(
            url=bookmark_in.url,
            title=bookmark_in.title,
            description=bookmark_in.description,
        )
        db.add(db_bookmark)
        await db.flush()  # IDを取得するため

        tags = bookmark_in.normalized_tags
        await self._create_tag_associations(db, db_bookmark.id, tags)

        logger.info(f"ブックマークを作成しました: id={db_bookmark.id}")
        return BookmarkDTO.from_model(db_bookmark, tags)

    @handle_db_operation("タグ付きブックマーク更新")
    async def update_with_tags(
        self, db: AsyncSession, bookmark_id: int, *, bookmark_in: BookmarkPayload
    ) -> BookmarkDTO | None:
        """ブックマークをタグと一緒に更新（タグは全削除後に再登録）

        Returns:
            更新後のブックマーク、存在しない場合はNone（何も変更しない）
        """
        # 作成日時は変更しないため、同一トランザクション内で保存値を読む
        current = await db.execute(select(self.model.created_at).where(self.model.id == bookmark_id))
        created_at = current.scalar_one_or_none()
        if created_at is None:
            return None

        stmt = (
            update(self.model)
            .where(self.model.id == bookmark_id)
            .values(
                url=bookmark_in.url,
                title=bookmark_in.title,
                description=bookmark_in.description,
            )
        )
        await db.execute(stmt)

        tags = bookmark_in.normalized_tags
        await db.execute(delete(BookmarkTag).where(BookmarkTag.bookmark_id == bookmark_id))
        await self._create_tag_associations(db, bookmark_id, tags)

        logger.info(f"ブックマークを更新しました: id={bookmark_id}")
        return BookmarkDTO(
            id=bookmark_id,
            created_at=ensure_utc(created_at),
            url=bookmark_in.url,
            title=bookmark_in.title,
            description=bookmark_in.description,
            tags=tags,
        )

    @handle_db_operation("ブックマーク削除")
    async def delete(self, db: AsyncSession, bookmark_id: int) -> bool:
        """ブックマークを削除（タグは外部キーのカスケードで削除される）

        Returns:
            削除した場合True、存在しない場合False
        """
        result = await db.execute(delete(self.model).where(self.model.id == bookmark_id))
        deleted = bool(result.rowcount)

        if deleted:
            logger.info(f"ブックマークを削除しました: id={bookmark_id}")
        return deleted

    @handle_db_operation("ブックマーク取得")
    async def get_by_id(self, db: AsyncSession, bookmark_id: int) -> BookmarkDTO | None:
        """IDでブックマークをタグ付きで取得"""
        db_bookmark = await self.get(db, bookmark_id)
        if db_bookmark is None:
            return None

        stmt = select(BookmarkTag.tag).where(BookmarkTag.bookmark_id == bookmark_id).order_by(BookmarkTag.id)
        result = await db.execute(stmt)
        tags = list(result.scalars().all())

        return BookmarkDTO.from_model(db_bookmark, tags)

    async def _create_tag_associations(self, db: AsyncSession, bookmark_id: int, tags: list[str]) -> None:
        """ブックマークとタグの関連付けを作成"""
        if not tags:
            return

        # 追加順にINSERTされ、IDの昇順がタグの挿入順になる
        db.add_all([BookmarkTag.create_association(bookmark_id, tag) for tag in tags])
        await db.flush()


bookmark_crud = CRUDBookmark(Bookmark)
