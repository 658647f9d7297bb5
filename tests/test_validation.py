"""入力検証テスト

ブックマーク候補データのフィールド検証とURL構文チェックのテスト
"""

from typing import Any

import pytest

from linkshelf.core.constants import ErrorMessages, normalize_tag, validate_url
from linkshelf.core.errors import ValidationError
from linkshelf.core.validation import validate_bookmark
from linkshelf.schemas.bookmark import BookmarkPayload
from linkshelf.utils.result import Err, Ok


def _error_of(candidate: Any) -> ValidationError:
    result = validate_bookmark(candidate)
    assert isinstance(result, Err)
    return result.error


class TestValidCandidates:
    """正常系"""

    def test_minimal_candidate(self) -> None:
        """URLとタイトルのみ"""
        result = validate_bookmark({"url": "https://example.com", "title": "Example"})

        assert isinstance(result, Ok)
        assert result.is_ok
        assert result.value.description is None
        assert result.value.tags is None
        assert result.value.normalized_tags == []

    def test_full_candidate_lowercases_tags(self, sample_bookmark_data: dict[str, Any]) -> None:
        """タグは小文字に正規化される"""
        result = validate_bookmark(sample_bookmark_data)

        assert isinstance(result, Ok)
        assert result.value.tags == ["python", "web"]
        assert result.value.url == sample_bookmark_data["url"]
        assert result.value.description == sample_bookmark_data["description"]

    def test_boundary_lengths(self) -> None:
        """タイトル200文字・説明500文字・タグ5個は許容"""
        result = validate_bookmark(
            {
                "url": "https://example.com",
                "title": "t" * 200,
                "description": "d" * 500,
                "tags": ["a", "b", "c", "d", "e"],
            }
        )

        assert isinstance(result, Ok)

    def test_null_description_and_tags(self) -> None:
        """説明・タグのnullは未指定扱い"""
        result = validate_bookmark(
            {"url": "https://example.com", "title": "Example", "description": None, "tags": None}
        )

        assert isinstance(result, Ok)

    def test_unknown_fields_are_ignored(self) -> None:
        """未知のフィールドは無視される"""
        result = validate_bookmark({"url": "https://example.com", "title": "Example", "id": 99})

        assert isinstance(result, Ok)
        assert "id" not in result.value.model_dump()

    def test_payload_instance_is_revalidated(self) -> None:
        """検証済みペイロードを再度渡しても同じ結果"""
        payload = BookmarkPayload(url="https://example.com", title="Example", tags=["A"])
        result = validate_bookmark(payload)

        assert isinstance(result, Ok)
        assert result.value.tags == ["a"]


class TestUrlValidation:
    """URL検証"""

    @pytest.mark.parametrize("candidate", [{"title": "x"}, {"url": None, "title": "x"}, {"url": 42, "title": "x"}])
    def test_url_missing_or_not_string(self, candidate: dict[str, Any]) -> None:
        error = _error_of(candidate)

        assert error.message == ErrorMessages.URL_REQUIRED
        assert error.field == "url"

    def test_url_bytes_rejected(self) -> None:
        """bytesは文字列として扱わない"""
        error = _error_of({"url": b"https://example.com", "title": "x"})

        assert error.message == ErrorMessages.URL_REQUIRED
        assert error.field == "url"

    def test_url_blank(self) -> None:
        error = _error_of({"url": "   ", "title": "x"})

        assert error.message == ErrorMessages.URL_REQUIRED

    @pytest.mark.parametrize(
        "url",
        ["not a url", "example.com", "http://", "https://exa mple.com", "http://example.com:99999", "1http://x.y"],
    )
    def test_url_invalid(self, url: str) -> None:
        error = _error_of({"url": url, "title": "x"})

        assert error.message == ErrorMessages.URL_INVALID
        assert error.field == "url"

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com",
            "http://localhost:8000/path?q=1#frag",
            "ftp://files.example.com/pub",
            "mailto:someone@example.com",
            "HTTPS://EXAMPLE.COM",
        ],
    )
    def test_valid_url_syntax(self, url: str) -> None:
        assert validate_url(url)


class TestTitleAndDescriptionValidation:
    """タイトル・説明の検証"""

    @pytest.mark.parametrize("title", [None, "", "   ", 123])
    def test_title_required(self, title: Any) -> None:
        error = _error_of({"url": "https://example.com", "title": title})

        assert error.message == ErrorMessages.TITLE_REQUIRED
        assert error.field == "title"

    def test_title_bytes_rejected(self) -> None:
        error = _error_of({"url": "https://example.com", "title": b"t"})

        assert error.message == ErrorMessages.TITLE_REQUIRED
        assert error.field == "title"

    def test_description_bytes_rejected(self) -> None:
        error = _error_of({"url": "https://example.com", "title": "x", "description": b"d"})

        assert error.message == ErrorMessages.DESCRIPTION_INVALID

    def test_title_too_long(self) -> None:
        error = _error_of({"url": "https://example.com", "title": "t" * 201})

        assert error.message == ErrorMessages.TITLE_TOO_LONG

    def test_description_too_long(self) -> None:
        error = _error_of({"url": "https://example.com", "title": "x", "description": "d" * 501})

        assert error.message == ErrorMessages.DESCRIPTION_TOO_LONG
        assert error.field == "description"

    def test_description_not_string(self) -> None:
        error = _error_of({"url": "https://example.com", "title": "x", "description": 10})

        assert error.message == ErrorMessages.DESCRIPTION_INVALID


class TestTagValidation:
    """タグの検証"""

    def test_six_tags_rejected(self) -> None:
        """6個のタグはエラー"""
        error = _error_of({"url": "https://example.com", "title": "x", "tags": ["a", "b", "c", "d", "e", "f"]})

        assert error.message == ErrorMessages.TAGS_TOO_MANY
        assert error.field == "tags"

    def test_case_insensitive_duplicates_rejected(self) -> None:
        """大文字・小文字違いの重複はエラー"""
        error = _error_of({"url": "https://example.com", "title": "x", "tags": ["A", "a"]})

        assert error.message == ErrorMessages.TAGS_DUPLICATE

    @pytest.mark.parametrize("tags", [["", "x"], ["x", "   "]])
    def test_blank_tag_rejected(self, tags: list[str]) -> None:
        error = _error_of({"url": "https://example.com", "title": "x", "tags": tags})

        assert error.message == ErrorMessages.TAG_EMPTY

    @pytest.mark.parametrize("tags", ["python", {"name": "python"}, 1])
    def test_tags_not_list(self, tags: Any) -> None:
        error = _error_of({"url": "https://example.com", "title": "x", "tags": tags})

        assert error.message == ErrorMessages.TAGS_MUST_BE_LIST

    def test_tags_not_strings(self) -> None:
        error = _error_of({"url": "https://example.com", "title": "x", "tags": ["python", 1]})

        assert error.message == ErrorMessages.TAGS_MUST_BE_STRINGS

    @pytest.mark.parametrize("tags", [{"b", "a", "c"}, ("a", "b"), frozenset({"a"})])
    def test_tags_unordered_or_non_list_rejected(self, tags: Any) -> None:
        """順序が保証されないコレクションやリスト以外は変換せずに拒否する"""
        error = _error_of({"url": "https://example.com", "title": "x", "tags": tags})

        assert error.message == ErrorMessages.TAGS_MUST_BE_LIST
        assert error.field == "tags"

    def test_bytes_tag_rejected(self) -> None:
        error = _error_of({"url": "https://example.com", "title": "x", "tags": ["python", b"web"]})

        assert error.message == ErrorMessages.TAGS_MUST_BE_STRINGS

    def test_tags_normalized_once(self) -> None:
        """保存形式のタグは検証時の正規化結果そのもの"""
        result = validate_bookmark({"url": "https://example.com", "title": "x", "tags": ["Python", "WEB"]})

        assert isinstance(result, Ok)
        assert result.value.tags == [normalize_tag("Python"), normalize_tag("WEB")] == ["python", "web"]
        assert result.value.normalized_tags == result.value.tags


class TestValidationOrder:
    """最初に失敗したフィールドのメッセージが採用される"""

    def test_url_reported_before_title(self) -> None:
        error = _error_of({"url": "invalid", "title": ""})

        assert error.field == "url"

    def test_title_reported_before_tags(self) -> None:
        error = _error_of({"url": "https://example.com", "title": "", "tags": ["a", "A"]})

        assert error.field == "title"

    def test_description_reported_before_tags(self) -> None:
        error = _error_of({"url": "https://example.com", "title": "x", "description": "d" * 501, "tags": "a"})

        assert error.field == "description"

    @pytest.mark.parametrize("candidate", [None, "url", ["https://example.com"], 1])
    def test_non_mapping_candidate(self, candidate: Any) -> None:
        error = _error_of(candidate)

        assert error.message == ErrorMessages.PAYLOAD_INVALID
