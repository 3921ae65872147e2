from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status
from pymongo.database import Database

from blog_api.blog import store
from blog_api.database.connection import get_db
from blog_api.models.schemas import validate_blog

router = APIRouter()


def _isoformat(value) -> Optional[str]:
    if value is None:
        return None
    return store.as_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _doc_to_dict(doc) -> Optional[Dict[str, Any]]:
    if not doc:
        return None
    return {
        "id": str(doc["_id"]),
        "title": doc.get("title"),
        "content": doc.get("content"),
        "author": doc.get("author"),
        "tags": doc.get("tags") or [],
        "createdAt": _isoformat(doc.get("createdAt")),
        "updatedAt": _isoformat(doc.get("updatedAt")),
    }


def _form_to_dict(form) -> Dict[str, Any]:
    """Map form fields onto the JSON body shape; tags, tags[] and tags[n] collect into a list."""
    body: Dict[str, Any] = {}
    tags = []
    for key, value in form.multi_items():
        if key == "tags" or key.startswith("tags["):
            tags.append(value)
        else:
            body[key] = value
    if tags:
        body["tags"] = tags
    return body


async def read_blog_body(request: Request, payload: Any = Body(default=None)) -> Any:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/x-www-form-urlencoded"):
        # the raw body is already cached on the request, so form() re-reads it
        return _form_to_dict(await request.form())
    return payload


@router.get("")
@router.get("/", include_in_schema=False)
def list_blogs(db: Database = Depends(get_db)):
    docs = store.list_blogs(db)
    return {
        "success": True,
        "count": len(docs),
        "data": [_doc_to_dict(d) for d in docs],
    }


@router.get("/{blog_id}")
def get_blog(blog_id: str, db: Database = Depends(get_db)):
    doc = store.get_blog(db, blog_id)
    return {"success": True, "data": _doc_to_dict(doc)}


@router.post("", status_code=status.HTTP_201_CREATED)
@router.post("/", status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_blog(payload: Any = Depends(read_blog_body), db: Database = Depends(get_db)):
    post = validate_blog(payload)
    doc = store.create_blog(db, post)
    return {
        "success": True,
        "message": "Blog created successfully",
        "data": _doc_to_dict(doc),
    }


@router.put("/{blog_id}")
def update_blog(blog_id: str, payload: Any = Depends(read_blog_body), db: Database = Depends(get_db)):
    post = validate_blog(payload)
    doc = store.update_blog(db, blog_id, post)
    return {
        "success": True,
        "message": "Blog updated successfully",
        "data": _doc_to_dict(doc),
    }


@router.delete("/{blog_id}")
def delete_blog(blog_id: str, db: Database = Depends(get_db)):
    store.delete_blog(db, blog_id)
    return {"success": True, "message": "Blog deleted successfully"}
