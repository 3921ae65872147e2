from pydantic import BaseModel, Field, ValidationError, field_validator
from typing import Any, Dict, List

from blog_api.errors import ValidationFailed

TITLE_MAX_LENGTH = 100
AUTHOR_MAX_LENGTH = 50


def _require_text(value: str, message: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(message)
    return value


class BlogPostIn(BaseModel):
    title: str = Field(default="", validate_default=True)
    content: str = Field(default="", validate_default=True)
    author: str = Field(default="", validate_default=True)
    tags: List[str] = Field(default_factory=list)

    @field_validator("title", "content", "author", mode="before")
    @classmethod
    def _missing_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        v = _require_text(v, "Title is required")
        if len(v) > TITLE_MAX_LENGTH:
            raise ValueError(f"Title cannot exceed {TITLE_MAX_LENGTH} characters")
        return v

    @field_validator("content")
    @classmethod
    def check_content(cls, v: str) -> str:
        return _require_text(v, "Content is required")

    @field_validator("author")
    @classmethod
    def check_author(cls, v: str) -> str:
        v = _require_text(v, "Author is required")
        if len(v) > AUTHOR_MAX_LENGTH:
            raise ValueError(f"Author name cannot exceed {AUTHOR_MAX_LENGTH} characters")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def check_tags_is_array(cls, v: Any) -> Any:
        # an omitted key never reaches here; an explicit null does
        if not isinstance(v, list):
            raise ValueError("Tags must be an array")
        return v

    @field_validator("tags")
    @classmethod
    def trim_tags(cls, v: List[str]) -> List[str]:
        return [tag.strip() for tag in v]


def format_errors(errors) -> List[Dict[str, Any]]:
    """Flatten pydantic error dicts into the ``errors`` list of a 400 response."""
    formatted = []
    for error in errors:
        loc = [str(part) for part in error["loc"] if part != "body"]
        if error["type"] == "value_error" and "error" in error.get("ctx", {}):
            msg = str(error["ctx"]["error"])
        else:
            msg = error["msg"]
        item = {
            "field": ".".join(loc) or "body",
            "msg": msg,
            "type": error["type"],
        }
        if "input" in error and error["type"] != "missing":
            item["value"] = error["input"]
        formatted.append(item)
    return formatted


def validate_blog(body: Any) -> BlogPostIn:
    """Validate a create/update body, reporting every field violation at once.

    Raises ValidationFailed before any storage call is made.
    """
    if body is None:
        body = {}
    if not isinstance(body, dict):
        raise ValidationFailed([{
            "field": "body",
            "msg": "Request body must be a JSON object",
            "type": "dict_type",
        }])
    try:
        return BlogPostIn.model_validate(body)
    except ValidationError as exc:
        raise ValidationFailed(format_errors(exc.errors()))
