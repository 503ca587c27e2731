import logging
from dataclasses import dataclass
from typing import Any, Dict, Type

from bson.errors import BSONError
from fastapi import APIRouter, Body, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pymongo.database import Database
from pymongo.errors import PyMongoError

import database
from schemas import (
    Book,
    BookUpdate,
    RecordValidationError,
    Transaction,
    TransactionUpdate,
    User,
    UserUpdate,
    validate_record,
)

logger = logging.getLogger(__name__)

# A malformed id surfaces as bson.errors.InvalidId, a BSONError
STORAGE_ERRORS = (PyMongoError, BSONError)


@dataclass(frozen=True)
class Resource:
    key: str  # envelope key for a single record
    collection: str  # collection name, URL segment and envelope key for lists
    schema: Type[BaseModel]
    update_schema: Type[BaseModel]


RESOURCES = (
    Resource("book", "books", Book, BookUpdate),
    Resource("transaction", "transactions", Transaction, TransactionUpdate),
    Resource("user", "users", User, UserUpdate),
)


def get_db(request: Request) -> Database:
    return request.app.state.db


def envelope(status_code: int, message: str, **payload: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"message": message, **payload}),
    )


def build_router(resource: Resource) -> APIRouter:
    """Create the five CRUD routes for one collection."""
    router = APIRouter(tags=[resource.collection.capitalize()])
    path = f"/{resource.collection}"
    item_path = f"{path}/{{record_id}}"
    model_name = resource.schema.__name__

    def texts(request: Request) -> Dict[str, str]:
        return request.app.state.messages[resource.key]

    @router.post(path, status_code=201)
    def create_record(
        payload: Dict[str, Any] = Body(...),
        db: Database = Depends(get_db),
        text: Dict[str, str] = Depends(texts),
    ):
        try:
            document = validate_record(resource.schema, payload)
            record = database.create_document(db, resource.collection, document)
        except RecordValidationError as e:
            logger.warning("Rejected %s: %s", resource.key, e)
            return envelope(400, text["create_failed"], error=str(e))
        except STORAGE_ERRORS as e:
            logger.warning("Insert into %s failed: %s", resource.collection, e)
            return envelope(400, text["create_failed"], error=str(e))
        return envelope(201, text["created"], **{resource.key: record})

    @router.get(path)
    def list_records(db: Database = Depends(get_db), text: Dict[str, str] = Depends(texts)):
        try:
            records = database.get_documents(db, resource.collection)
        except STORAGE_ERRORS as e:
            logger.error("Listing %s failed: %s", resource.collection, e)
            return envelope(500, text["list_failed"], error=str(e))
        return envelope(200, text["listed"], **{resource.collection: records})

    @router.get(item_path)
    def get_record(record_id: str, db: Database = Depends(get_db), text: Dict[str, str] = Depends(texts)):
        try:
            record = database.get_document(db, resource.collection, record_id)
        except STORAGE_ERRORS as e:
            logger.error("Reading %s %s failed: %s", resource.key, record_id, e)
            return envelope(500, text["fetch_failed"], error=str(e))
        if record is None:
            return envelope(404, text["not_found"])
        return envelope(200, text["fetched"], **{resource.key: record})

    @router.put(item_path)
    def update_record(
        record_id: str,
        payload: Dict[str, Any] = Body(...),
        db: Database = Depends(get_db),
        text: Dict[str, str] = Depends(texts),
    ):
        try:
            changes = validate_record(resource.update_schema, payload, partial=True, model_name=model_name)
            record = database.update_document(db, resource.collection, record_id, changes)
        except RecordValidationError as e:
            logger.warning("Rejected update of %s %s: %s", resource.key, record_id, e)
            return envelope(400, text["update_failed"], error=str(e))
        except STORAGE_ERRORS as e:
            logger.warning("Updating %s %s failed: %s", resource.key, record_id, e)
            return envelope(400, text["update_failed"], error=str(e))
        if record is None:
            return envelope(404, text["not_found"])
        return envelope(200, text["updated"], **{resource.key: record})

    @router.delete(item_path)
    def delete_record(record_id: str, db: Database = Depends(get_db), text: Dict[str, str] = Depends(texts)):
        try:
            record = database.delete_document(db, resource.collection, record_id)
        except STORAGE_ERRORS as e:
            logger.error("Deleting %s %s failed: %s", resource.key, record_id, e)
            return envelope(500, text["delete_failed"], error=str(e))
        if record is None:
            return envelope(404, text["not_found"])
        return envelope(200, text["deleted"], **{resource.key: record})

    return router
