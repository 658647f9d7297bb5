"""ブックマーク入力検証

候補データをBookmarkPayloadに変換し、失敗時は最初に失敗したフィールドの
ValidationErrorを返す（副作用なし）
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from linkshelf.core.constants import ErrorMessages
from linkshelf.core.errors import ValidationError
from linkshelf.schemas.bookmark import BookmarkPayload
from linkshelf.utils.result import Err, Ok, Result

# 型エラー・欠落時のフィールド別メッセージ
_FIELD_MESSAGES: dict[str, str] = {
    "url": ErrorMessages.URL_REQUIRED,
    "title": ErrorMessages.TITLE_REQUIRED,
    "description": ErrorMessages.DESCRIPTION_INVALID,
    "tags": ErrorMessages.TAGS_MUST_BE_LIST,
}


def _to_validation_error(exc: PydanticValidationError) -> ValidationError:
    """Pydanticのエラー一覧の先頭をドメインのValidationErrorへ変換"""
    errors = exc.errors()
    if not errors:
        return ValidationError(ErrorMessages.VALIDATION_ERROR)

    first = errors[0]
    loc = first.get("loc", ())
    field = str(loc[0]) if loc else None

    if first.get("type") == "value_error":
        ctx = first.get("ctx") or {}
        return ValidationError(str(ctx.get("error", first.get("msg"))), field)

    # タグ要素が文字列でない場合は loc が ("tags", index)
    if field == "tags" and len(loc) > 1:
        return ValidationError(ErrorMessages.TAGS_MUST_BE_STRINGS, field)

    return ValidationError(_FIELD_MESSAGES.get(field or "", ErrorMessages.VALIDATION_ERROR), field)


def validate_bookmark(candidate: Any) -> Result[BookmarkPayload, ValidationError]:
    """候補データを検証

    作成・更新で同一のルールを使用する

    Args:
        candidate: 検証対象（通常はリクエストボディの辞書）

    Returns:
        成功時は Ok(BookmarkPayload)、失敗時は Err(ValidationError)
    """
    if isinstance(candidate, BookmarkPayload):
        candidate = candidate.model_dump()

    if not isinstance(candidate, Mapping):
        return Err(ValidationError(ErrorMessages.PAYLOAD_INVALID))

    try:
        payload = BookmarkPayload.model_validate(dict(candidate))
    except PydanticValidationError as e:
        return Err(_to_validation_error(e))

    return Ok(payload)
