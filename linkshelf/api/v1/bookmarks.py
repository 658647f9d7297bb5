"""ブックマークAPIエンドポイント

ブックマークの作成、取得、更新、削除、一覧のREST APIを提供
"""

# FastAPIの依存注入システム（Depends, Query, Body）はLint警告の対象外とする
# ruff: noqa: B008

from typing import Any, NoReturn

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response
from fastapi import status as http_status

from linkshelf.core.constants import APIConstants
from linkshelf.core.dependencies import get_bookmark_repository
from linkshelf.core.errors import NotFound, ValidationError
from linkshelf.dtos.bookmark import BookmarkDTO
from linkshelf.repositories.bookmark import BookmarkRepository
from linkshelf.schemas.bookmark import BookmarkListResponse, BookmarkResponse, PaginationMeta
from linkshelf.utils.result import Err

router = APIRouter()


def _to_response(bookmark: BookmarkDTO) -> BookmarkResponse:
    return BookmarkResponse.model_validate(bookmark)


def _raise_for_error(error: ValidationError | NotFound) -> NoReturn:
    """ドメインエラーをHTTP例外に変換"""
    if isinstance(error, NotFound):
        raise HTTPException(status_code=http_status.HTTP_404_NOT_FOUND, detail=error.message)
    raise HTTPException(status_code=http_status.HTTP_400_BAD_REQUEST, detail=error.message)


@router.get("/", response_model=BookmarkListResponse)
async def get_bookmarks(
    *,
    repository: BookmarkRepository = Depends(get_bookmark_repository),
    tag: str | None = Query(default=None, description="タグで絞り込み（大文字・小文字は区別しない）"),
    page: int = Query(default=1, description="ページ番号"),
    limit: int = Query(default=APIConstants.DEFAULT_PAGE_SIZE, description="1ページあたりの件数"),
) -> BookmarkListResponse:
    """ブックマーク一覧を取得（作成日時の新しい順）"""
    result = await repository.list(tag=tag, page=page, size=limit)
    if isinstance(result, Err):
        _raise_for_error(result.error)

    bookmark_page = result.value
    return BookmarkListResponse(
        data=[_to_response(bookmark) for bookmark in bookmark_page.items],
        pagination=PaginationMeta(
            page=bookmark_page.page,
            limit=bookmark_page.per_page,
            total=bookmark_page.total,
            total_pages=bookmark_page.total_pages,
        ),
    )


@router.post("/", response_model=BookmarkResponse, status_code=http_status.HTTP_201_CREATED)
async def create_bookmark(
    *,
    repository: BookmarkRepository = Depends(get_bookmark_repository),
    payload: Any = Body(..., description="url, title, description, tags"),
) -> BookmarkResponse:
    """ブックマークを作成"""
    result = await repository.create(payload)
    if isinstance(result, Err):
        _raise_for_error(result.error)

    return _to_response(result.value)


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    *, repository: BookmarkRepository = Depends(get_bookmark_repository), bookmark_id: int
) -> BookmarkResponse:
    """特定ブックマークを取得"""
    result = await repository.get(bookmark_id)
    if isinstance(result, Err):
        _raise_for_error(result.error)

    return _to_response(result.value)


@router.put("/{bookmark_id}", response_model=BookmarkResponse)
async def update_bookmark(
    *,
    repository: BookmarkRepository = Depends(get_bookmark_repository),
    bookmark_id: int,
    payload: Any = Body(..., description="url, title, description, tags（完全置換）"),
) -> BookmarkResponse:
    """ブックマークを更新（作成日時は変更されない）"""
    result = await repository.update(bookmark_id, payload)
    if isinstance(result, Err):
        _raise_for_error(result.error)

    return _to_response(result.value)


@router.delete("/{bookmark_id}", status_code=http_status.HTTP_204_NO_CONTENT)
async def delete_bookmark(
    *, repository: BookmarkRepository = Depends(get_bookmark_repository), bookmark_id: int
) -> Response:
    """ブックマークを削除（関連タグも削除）"""
    result = await repository.delete(bookmark_id)
    if isinstance(result, Err):
        _raise_for_error(result.error)

    return Response(status_code=http_status.HTTP_204_NO_CONTENT)
