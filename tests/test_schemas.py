import pytest

from blog_api.errors import ValidationFailed
from blog_api.models.schemas import BlogPostIn, validate_blog


def _messages(exc_info):
    return [e["msg"] for e in exc_info.value.errors]


def test_valid_body_is_trimmed():
    post = validate_blog({
        "title": "  Hello  ",
        "content": " body ",
        "author": " Ada ",
        "tags": [" a ", "b"],
    })
    assert post == BlogPostIn(title="Hello", content="body", author="Ada", tags=["a", "b"])


def test_tags_default_to_empty_list():
    post = validate_blog({"title": "t", "content": "c", "author": "a"})
    assert post.tags == []


def test_null_tags_are_not_an_array():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_blog({"title": "t", "content": "c", "author": "a", "tags": None})
    assert exc_info.value.errors == [
        {"field": "tags", "msg": "Tags must be an array", "type": "value_error", "value": None}
    ]


def test_all_violations_are_collected():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_blog({"title": "   ", "content": "", "tags": "nope"})
    assert exc_info.value.status_code == 400
    fields = {e["field"]: e["msg"] for e in exc_info.value.errors}
    assert fields == {
        "title": "Title is required",
        "content": "Content is required",
        "author": "Author is required",
        "tags": "Tags must be an array",
    }


def test_empty_body_reports_every_required_field():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_blog(None)
    assert _messages(exc_info) == ["Title is required", "Content is required", "Author is required"]


def test_title_length_limit():
    validate_blog({"title": "x" * 100, "content": "c", "author": "a"})
    with pytest.raises(ValidationFailed) as exc_info:
        validate_blog({"title": "x" * 101, "content": "c", "author": "a"})
    assert _messages(exc_info) == ["Title cannot exceed 100 characters"]
    assert exc_info.value.errors[0]["value"] == "x" * 101


def test_length_is_measured_after_trimming():
    post = validate_blog({"title": " " + "x" * 100 + " ", "content": "c", "author": " " + "a" * 50 + " "})
    assert len(post.title) == 100
    assert len(post.author) == 50


def test_author_length_limit():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_blog({"title": "t", "content": "c", "author": "a" * 51})
    assert _messages(exc_info) == ["Author name cannot exceed 50 characters"]


def test_non_string_tag_is_rejected():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_blog({"title": "t", "content": "c", "author": "a", "tags": ["ok", 3]})
    assert exc_info.value.errors[0]["field"] == "tags.1"


def test_body_must_be_an_object():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_blog(["title"])
    assert exc_info.value.errors[0]["field"] == "body"
