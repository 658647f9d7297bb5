"""ブックマークリポジトリ

検証・書き込み・一覧クエリを束ねるファサード
API層などのアダプタはこのクラスのみを呼び出す
"""

import logging
from typing import Any

from linkshelf.core.constants import APIConstants
from linkshelf.core.database import DatabaseManager
from linkshelf.core.errors import NotFound, ValidationError
from linkshelf.core.validation import validate_bookmark
from linkshelf.crud.bookmark import CRUDBookmark, bookmark_crud
from linkshelf.dtos.bookmark import BookmarkDTO, BookmarkPageDTO
from linkshelf.repositories.bookmark_query import BookmarkQueryEngineInterface, bookmark_query_engine
from linkshelf.utils.pagination import calculate_pagination
from linkshelf.utils.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class BookmarkRepository:
    """ブックマークリポジトリ

    - 各操作は独立したセッションで実行する
    - 読み取りもトランザクション内で行い、書き込みの途中状態を観測しない
    - 書き込みは1トランザクション（成功時コミット、例外時ロールバック）
    - ValidationError / NotFound は Err として返し、StorageFault はそのまま送出する

    Example:
        database = DatabaseManager("sqlite+aiosqlite:///bookmarks.db")
        repository = BookmarkRepository(database)
        await repository.initialize()
        result = await repository.create({"url": "https://example.com", "title": "Example"})
    """

    def __init__(
        self,
        database: DatabaseManager,
        *,
        store: CRUDBookmark | None = None,
        query: BookmarkQueryEngineInterface | None = None,
    ) -> None:
        self.database = database
        self.store = store or bookmark_crud
        self.query = query or bookmark_query_engine

    async def initialize(self) -> None:
        """スキーマを作成（既に存在する場合は何もしない）"""
        await self.database.create_tables()
        logger.info("ブックマークリポジトリを初期化しました")

    async def close(self) -> None:
        """データベース接続を終了"""
        await self.database.close()

    async def create(self, candidate: Any) -> Result[BookmarkDTO, ValidationError]:
        """ブックマークを作成

        Args:
            candidate: 作成データ（url, title, description, tags）

        Returns:
            成功時は Ok(作成したブックマーク)、検証失敗時は Err(ValidationError)

        Raises:
            StorageFault: データベース障害の場合
        """
        validated = validate_bookmark(candidate)
        if isinstance(validated, Err):
            logger.info(f"ブックマーク作成の入力値が不正です: {validated.error.message}")
            return validated

        async with self.database.transaction() as db:
            bookmark = await self.store.create_with_tags(db, bookmark_in=validated.value)

        return Ok(bookmark)

    async def update(self, bookmark_id: int, candidate: Any) -> Result[BookmarkDTO, ValidationError | NotFound]:
        """ブックマークを完全置換で更新（作成日時は保持）

        Returns:
            成功時は Ok(更新後のブックマーク)、検証失敗時は Err(ValidationError)、
            存在しない場合は Err(NotFound)
        """
        validated = validate_bookmark(candidate)
        if isinstance(validated, Err):
            logger.info(f"ブックマーク更新の入力値が不正です: id={bookmark_id}, {validated.error.message}")
            return validated

        async with self.database.transaction() as db:
            bookmark = await self.store.update_with_tags(db, bookmark_id, bookmark_in=validated.value)

        if bookmark is None:
            return Err(NotFound(bookmark_id))
        return Ok(bookmark)

    async def delete(self, bookmark_id: int) -> Result[int, NotFound]:
        """ブックマークを削除（タグも削除される）

        Returns:
            成功時は Ok(削除したID)、存在しない場合は Err(NotFound)
        """
        async with self.database.transaction() as db:
            deleted = await self.store.delete(db, bookmark_id)

        if not deleted:
            return Err(NotFound(bookmark_id))
        return Ok(bookmark_id)

    async def get(self, bookmark_id: int) -> Result[BookmarkDTO, NotFound]:
        """IDでブックマークを取得

        ブックマーク行とタグは同一トランザクション内で読み取る
        """
        async with self.database.session() as db, db.begin():
            bookmark = await self.store.get_by_id(db, bookmark_id)

        if bookmark is None:
            return Err(NotFound(bookmark_id))
        return Ok(bookmark)

    async def list(
        self, *, tag: str | None = None, page: int = 1, size: int = APIConstants.DEFAULT_PAGE_SIZE
    ) -> Result[BookmarkPageDTO, ValidationError]:
        """ブックマーク一覧を取得

        Args:
            tag: 絞り込むタグ（大文字・小文字は区別しない、空文字は絞り込みなし）
            page: ページ番号（1以上）
            size: 1ページあたりの件数（1〜100）

        Returns:
            成功時は Ok(一覧)、ページ指定が不正な場合は Err(ValidationError)
        """
        try:
            params = calculate_pagination(page, size)
        except ValueError as e:
            return Err(ValidationError(str(e), "page" if page < 1 else "limit"))

        # 件数・一覧・タグを同一スナップショットから取得
        async with self.database.session() as db, db.begin():
            bookmark_page = await self.query.get_list(db, tag=tag, skip=params.skip, limit=params.limit)

        return Ok(bookmark_page)
