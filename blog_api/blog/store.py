import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from blog_api.errors import InvalidIdentifier, NotFound, StorageFailure
from blog_api.models.schemas import BlogPostIn

logger = logging.getLogger(__name__)

COLLECTION = "blogs"


def utc_now() -> datetime:
    # BSON dates only keep milliseconds
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_id(blog_id: str) -> ObjectId:
    try:
        return ObjectId(blog_id)
    except (InvalidId, TypeError):
        raise InvalidIdentifier()


def list_blogs(db: Database) -> List[Dict[str, Any]]:
    try:
        return list(db[COLLECTION].find().sort("createdAt", DESCENDING))
    except PyMongoError:
        logger.exception("Error fetching blogs")
        raise StorageFailure("Error fetching blogs")


def get_blog(db: Database, blog_id: str) -> Dict[str, Any]:
    oid = parse_id(blog_id)
    try:
        doc = db[COLLECTION].find_one({"_id": oid})
    except PyMongoError:
        logger.exception("Error fetching blog %s", blog_id)
        raise StorageFailure("Error fetching blog")
    if not doc:
        raise NotFound()
    return doc


def create_blog(db: Database, post: BlogPostIn) -> Dict[str, Any]:
    now = utc_now()
    doc = post.model_dump()
    doc.update({"createdAt": now, "updatedAt": now})
    try:
        res = db[COLLECTION].insert_one(doc)
    except PyMongoError:
        logger.exception("Error creating blog")
        raise StorageFailure("Error creating blog")
    doc["_id"] = res.inserted_id
    return doc


def update_blog(db: Database, blog_id: str, post: BlogPostIn) -> Dict[str, Any]:
    """Replace title/content/author/tags and move updatedAt forward.

    createdAt and _id are never touched. Concurrent updates are last-write-wins.
    """
    oid = parse_id(blog_id)
    collection = db[COLLECTION]
    try:
        current = collection.find_one({"_id": oid}, {"updatedAt": 1})
        if not current:
            raise NotFound()

        stamp = utc_now()
        previous = current.get("updatedAt")
        if previous is not None and stamp <= as_utc(previous):
            stamp = as_utc(previous) + timedelta(milliseconds=1)

        fields = post.model_dump()
        fields["updatedAt"] = stamp
        doc = collection.find_one_and_update(
            {"_id": oid},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
    except PyMongoError:
        logger.exception("Error updating blog %s", blog_id)
        raise StorageFailure("Error updating blog")
    if not doc:
        # deleted between the read and the write
        raise NotFound()
    return doc


def delete_blog(db: Database, blog_id: str) -> None:
    oid = parse_id(blog_id)
    try:
        result = db[COLLECTION].delete_one({"_id": oid})
    except PyMongoError:
        logger.exception("Error deleting blog %s", blog_id)
        raise StorageFailure("Error deleting blog")
    if result.deleted_count == 0:
        raise NotFound()
