"""pytest設定とテスト環境インフラ

基本的なフィクスチャとテスト設定のエントリーポイント
"""

import os

# 設定モジュールの読み込み前にテスト用環境変数を設定
os.environ["ENVIRONMENT"] = "testing"
os.environ["DB_ENGINE"] = "sqlite"
os.environ["SQLITE_PATH"] = ":memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ALLOWED_HOSTS"] = "localhost,127.0.0.1,testserver"

from collections.abc import AsyncGenerator  # noqa: E402
from pathlib import Path  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from linkshelf.core.database import DatabaseManager  # noqa: E402
from linkshelf.repositories.bookmark import BookmarkRepository  # noqa: E402
from tests.fixtures.entities import *  # noqa: F403, F401, E402
from tests.fixtures.sample_data import *  # noqa: F403, F401, E402
from tests.tests_config.app_factory import create_test_app  # noqa: E402
from tests.tests_config.database import (  # noqa: E402
    create_file_test_database,
    create_test_database,
    get_test_repository,
)


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[DatabaseManager]:
    """テスト用データベースマネージャー（テストごとに新しいインメモリDB）"""
    yield create_test_database()


@pytest_asyncio.fixture
async def repository(database: DatabaseManager) -> AsyncGenerator[BookmarkRepository]:
    """スキーマ作成済みのテスト用リポジトリ"""
    async for test_repository in get_test_repository(database):
        yield test_repository


@pytest_asyncio.fixture
async def file_repository(tmp_path: Path) -> AsyncGenerator[BookmarkRepository]:
    """ファイルDBを使用するテスト用リポジトリ（複数接続からの同時読み書き用）"""
    async for test_repository in get_test_repository(create_file_test_database(tmp_path / "bookmarks.db")):
        yield test_repository


@pytest_asyncio.fixture
async def async_client(repository: BookmarkRepository) -> AsyncGenerator[AsyncClient]:
    """テスト用非同期HTTPクライアント"""
    app = create_test_app(repository)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
