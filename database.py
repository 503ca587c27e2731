"""
Database Helpers

Thin wrappers around pymongo used by the route handlers. Every helper takes
the database handle explicitly; the handle is opened once at startup (see
main.lifespan) and injected into handlers.

Documents leave this module with their "_id" converted to a string.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from bson import ObjectId
from pydantic import BaseModel
from pymongo import MongoClient, ReturnDocument
from pymongo.database import Database

logger = logging.getLogger(__name__)


def open_client(uri: str) -> MongoClient:
    """Create a client and make sure the server answers before returning it."""
    client = MongoClient(uri)
    try:
        client.admin.command("ping")
    except Exception:
        client.close()
        raise
    logger.info("Connected to MongoDB")
    return client


def get_database(client: MongoClient, default_name: str) -> Database:
    # The database named in the URI wins over the configured default
    return client.get_default_database(default=default_name)


def _serialize(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def _object_id(document_id: str) -> ObjectId:
    # Raises bson.errors.InvalidId for strings that cannot be an ObjectId
    return ObjectId(document_id)


def create_document(db: Database, collection_name: str, data: Union[BaseModel, dict]) -> Dict[str, Any]:
    """Insert a single document and return it as stored.

    The document is read back so values the server normalizes (dates lose
    their timezone and sub-millisecond precision) match later reads.
    """
    if isinstance(data, BaseModel):
        data_dict = data.model_dump(exclude_none=True)
    else:
        data_dict = dict(data)
    result = db[collection_name].insert_one(data_dict)
    return _serialize(db[collection_name].find_one({"_id": result.inserted_id}))


def get_documents(db: Database, collection_name: str) -> List[Dict[str, Any]]:
    return [_serialize(doc) for doc in db[collection_name].find({})]


def get_document(db: Database, collection_name: str, document_id: str) -> Optional[Dict[str, Any]]:
    oid = _object_id(document_id)
    return _serialize(db[collection_name].find_one({"_id": oid}))


def update_document(db: Database, collection_name: str, document_id: str,
                    changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Apply changes with $set and return the document as it is afterwards.

    An empty change set leaves the document untouched.
    """
    oid = _object_id(document_id)
    if not changes:
        return _serialize(db[collection_name].find_one({"_id": oid}))
    doc = db[collection_name].find_one_and_update(
        {"_id": oid},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )
    return _serialize(doc)


def delete_document(db: Database, collection_name: str, document_id: str) -> Optional[Dict[str, Any]]:
    """Remove a document and return it as it was before removal."""
    oid = _object_id(document_id)
    return _serialize(db[collection_name].find_one_and_delete({"_id": oid}))


def describe_database(db: Optional[Database]) -> Dict[str, Any]:
    """Connection report used by the diagnostics endpoint."""
    response = {
        "backend": "Running",
        "database": "Not Available",
        "database_name": None,
        "connection_status": "Not Connected",
        "collections": [],
        "checked_at": datetime.now(timezone.utc).isoformat(),
    }
    if db is None:
        return response
    response["database"] = "Available"
    response["database_name"] = db.name
    response["connection_status"] = "Connected"
    try:
        response["collections"] = db.list_collection_names()[:10]
        response["database"] = "Connected & Working"
    except Exception as e:
        logger.warning("Database check failed: %s", e)
        response["database"] = f"Connected but Error: {str(e)[:50]}"
    return response
