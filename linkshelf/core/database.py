"""データベース接続管理モジュール

SQLAlchemy 2.x の非同期エンジンを使用した接続管理、
セッション・トランザクション境界、スキーマ作成、ヘルスチェック機能を提供
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool

from linkshelf.core.config import settings
from linkshelf.core.errors import StorageFault

logger = logging.getLogger(__name__)


def _configure_sqlite_connection(dbapi_connection: Any, connection_record: Any) -> None:  # noqa: ARG001
    """SQLite接続ごとの初期設定

    - 外部キー制約を有効化（カスケード削除に必須）
    - ドライバの暗黙のトランザクション制御を無効化（BEGINは _begin_sqlite_transaction で発行）
    """
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _begin_sqlite_transaction(conn: Any) -> None:
    """読み取りのみの操作も含め、トランザクション開始時にBEGINを発行

    同一トランザクション内の複数のSELECTが同じスナップショットを参照する
    """
    conn.exec_driver_sql("BEGIN")


def _enable_sqlite_wal(dbapi_connection: Any, connection_record: Any) -> None:  # noqa: ARG001
    """ファイルDBではWALジャーナルモードを使用"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


class DatabaseManager:
    """データベース接続を管理するクラス

    SQLAlchemy 2.x準拠の非同期エンジンとセッション管理を提供
    アプリケーション起動時に明示的に生成し、必要な箇所へ受け渡す
    """

    def __init__(self, database_url: str | None = None) -> None:
        self._database_url = database_url or settings.database_url_async
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_sqlite(self) -> bool:
        return make_url(self._database_url).get_backend_name() == "sqlite"

    def create_engine(self) -> AsyncEngine:
        """非同期SQLAlchemyエンジンを作成"""
        if self._engine is not None:
            return self._engine

        url = make_url(self._database_url)
        engine_kwargs: dict[str, Any] = {"echo": settings.is_development}

        if self.is_sqlite:
            in_memory = url.database in (None, "", ":memory:")
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            # インメモリDBは単一接続を共有しないとテーブルが消える
            engine_kwargs["poolclass"] = StaticPool if in_memory else NullPool
        else:
            engine_kwargs.update(
                {
                    "pool_size": settings.DB_POOL_SIZE,
                    "max_overflow": settings.DB_MAX_OVERFLOW,
                    "pool_timeout": 30,
                    "pool_recycle": 3600,  # 1時間でコネクションを再作成
                    "pool_pre_ping": True,  # 接続確認
                    "connect_args": {
                        "server_settings": {
                            "application_name": f"{settings.PROJECT_NAME}-{settings.ENVIRONMENT}",
                            "timezone": "UTC",
                        }
                    },
                }
            )

        try:
            self._engine = create_async_engine(url, **engine_kwargs)
        except Exception as e:
            logger.error(f"データベースエンジンの作成に失敗しました: {e}")
            raise

        if self.is_sqlite:
            event.listen(self._engine.sync_engine, "connect", _configure_sqlite_connection)
            event.listen(self._engine.sync_engine, "begin", _begin_sqlite_transaction)
            if url.database not in (None, "", ":memory:"):
                event.listen(self._engine.sync_engine, "connect", _enable_sqlite_wal)

        logger.info(f"データベースエンジンが作成されました: {url.render_as_string(hide_password=True)}")
        return self._engine

    def create_session_factory(self) -> async_sessionmaker[AsyncSession]:
        """非同期セッションファクトリーを作成"""
        if self._session_factory is not None:
            return self._session_factory

        self._session_factory = async_sessionmaker(
            bind=self.create_engine(),
            class_=AsyncSession,
            expire_on_commit=False,  # コミット後もオブジェクトを使用可能
            autoflush=True,
        )

        logger.info("データベースセッションファクトリーが作成されました")
        return self._session_factory

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession]:
        """読み取り用のデータベースセッションを取得

        Example:
            async with database.session() as db:
                result = await db.execute(stmt)
        """
        session_factory = self.create_session_factory()

        async with session_factory() as session:
            try:
                logger.debug("データベースセッションを作成しました")
                yield session
            except Exception as e:
                logger.error(f"セッション使用中にエラーが発生しました: {e}")
                await session.rollback()
                raise

    def transaction(self) -> "DatabaseTransaction":
        """書き込み用のトランザクションを取得"""
        return DatabaseTransaction(self)

    async def create_tables(self) -> None:
        """すべてのテーブルを作成（既存テーブルはそのまま）"""
        from linkshelf.models.base import Base

        engine = self.create_engine()
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            logger.error(f"テーブル作成中にエラーが発生しました: {e}")
            raise StorageFault("テーブルの作成に失敗しました") from e

        logger.info("すべてのテーブルが作成されました")

    async def drop_tables(self) -> None:
        """すべてのテーブルを削除（テスト用）

        注意: 絶対にテスト環境でのみ使用のこと
        """
        if not settings.is_testing:
            raise RuntimeError("drop_tables()はテスト環境でのみ実行可能です")

        from linkshelf.models.base import Base

        engine = self.create_engine()
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

        logger.warning("すべてのテーブルが削除されました")

    async def check_connection(self) -> bool:
        """データベース接続の健全性をチェック

        Returns:
            接続が正常な場合True、それ以外False
        """
        try:
            engine = self.create_engine()

            async with engine.connect() as conn:
                result = await conn.execute(text("SELECT 1"))
                result.scalar()

            logger.debug("データベース接続チェック: 正常")
            return True

        except SQLAlchemyError as e:
            logger.error(f"データベース接続チェック失敗: {e}")
            return False

    async def close(self) -> None:
        """データベースエンジンとセッションを終了

        アプリケーション終了時に呼び出す
        """
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("データベースエンジンを閉じました")
            self._engine = None
            self._session_factory = None


class DatabaseTransaction:
    """データベーストランザクションを管理するコンテキストマネージャー

    Example:
        async with database.transaction() as db:
            db.add(bookmark)
            # 正常終了時に自動コミット、例外時に自動ロールバック
    """

    def __init__(self, database: DatabaseManager) -> None:
        self.database = database
        self.session: AsyncSession | None = None

    async def __aenter__(self) -> AsyncSession:
        """トランザクションを開始"""
        session_factory = self.database.create_session_factory()
        self.session = session_factory()
        return self.session

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any | None,
    ) -> None:
        """トランザクションを終了します。"""
        if self.session is None:
            return

        try:
            if exc_type is None:
                try:
                    await self.session.commit()
                except SQLAlchemyError as e:
                    await self.session.rollback()
                    logger.error(f"コミットに失敗したためロールバックしました: {e}")
                    raise StorageFault("トランザクションのコミットに失敗しました") from e
                logger.debug("トランザクションをコミットしました")
            else:
                await self.session.rollback()
                logger.warning(f"トランザクションをロールバックしました: {exc_val}")
        finally:
            await self.session.close()
            logger.debug("トランザクションセッションを閉じました")


async def health_check(database: DatabaseManager) -> dict:
    """データベースのヘルスチェックを実行

    Returns:
        ヘルスチェック結果を含む辞書

    Example:
        result = await health_check(database)
        print(result["status"])  # "healthy" or "unhealthy"
    """
    is_connected = await database.check_connection()

    if is_connected:
        return {
            "status": "healthy",
            "database": "connected",
        }

    return {
        "status": "unhealthy",
        "database": "disconnected",
        "error": "Connection failed",
    }
