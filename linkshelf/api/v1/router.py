"""API v1 ルーター統合

すべてのv1 APIエンドポイントを統合
"""

from typing import Any

from fastapi import APIRouter

from linkshelf.api.v1 import bookmarks
from linkshelf.core.constants import ErrorMessages

# メインのAPIルーター
api_router = APIRouter()

# ブックマーク管理エンドポイント
api_router.include_router(
    bookmarks.router,
    prefix="/bookmarks",
    tags=["ブックマーク管理"],
    responses={
        400: {"description": ErrorMessages.BAD_REQUEST},
        404: {"description": ErrorMessages.BOOKMARK_NOT_FOUND},
        500: {"description": ErrorMessages.SERVER_ERROR},
    },
)


# ルーター情報（デバッグ用）
@api_router.get("/", include_in_schema=False)
async def api_info() -> dict[str, Any]:
    """API情報を取得（デバッグ用）"""
    return {
        "message": "Linkshelf API v1",
        "version": "1.0.0",
        "endpoints": {"bookmarks": "/bookmarks/*"},
        "documentation": {"swagger": "/docs", "redoc": "/redoc", "openapi": "/openapi.json"},
    }


__all__ = ["api_router"]
