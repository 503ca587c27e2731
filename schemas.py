"""
Database Schemas

MongoDB collection schemas for the bookstore, defined as Pydantic models.
Payloads are validated against these models before they reach the database.

Each create model maps to one collection:
- Book -> "books" collection
- Transaction -> "transactions" collection
- User -> "users" collection

The *Update models accept any subset of the same fields for partial updates.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError


class RecordValidationError(Exception):
    """Raised when a payload does not match its collection schema."""

    def __init__(self, model: str, errors: List[Dict[str, Any]]):
        self.model = model
        self.errors = errors
        super().__init__(self.describe())

    def describe(self) -> str:
        parts = []
        for err in self.errors:
            field = ".".join(str(p) for p in err.get("loc", ())) or "body"
            parts.append(f"{field}: {err.get('msg', 'invalid value')}")
        return f"{self.model} validation failed: " + ", ".join(parts)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _reject_null(value):
    if value is None:
        raise ValueError("Field may not be null")
    return value


class CollectionModel(BaseModel):
    # Text fields accept numbers, stored as their string form
    model_config = ConfigDict(coerce_numbers_to_str=True)


class Book(CollectionModel):
    """
    Books collection schema
    Collection name: "books"
    """
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Author name")
    price: float = Field(..., description="Price")
    cover_image: Optional[str] = Field(None, description="Cover image URL")


class BookUpdate(CollectionModel):
    title: Optional[str] = None
    author: Optional[str] = None
    price: Optional[float] = None
    cover_image: Optional[str] = None

    @field_validator("title", "author", "price")
    @classmethod
    def required_not_null(cls, value):
        return _reject_null(value)


class Transaction(CollectionModel):
    """
    Transactions collection schema
    Collection name: "transactions"
    """
    transaction_date: datetime = Field(default_factory=_utcnow, description="Defaults to creation time")
    total: float = Field(..., description="Transaction total")
    confirm: Literal["Yes", "No"] = Field(..., description="Confirmation flag")
    address: Optional[str] = Field(None, description="Shipping address")


class TransactionUpdate(CollectionModel):
    transaction_date: Optional[datetime] = None
    total: Optional[float] = None
    confirm: Optional[Literal["Yes", "No"]] = None
    address: Optional[str] = None

    @field_validator("transaction_date", "total", "confirm")
    @classmethod
    def required_not_null(cls, value):
        return _reject_null(value)


class User(CollectionModel):
    """
    Users collection schema
    Collection name: "users"

    The password is stored exactly as submitted.
    """
    name: str = Field(..., description="Full name")
    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Password")
    gender: Literal["Male", "Female"] = Field(..., description="Gender")
    profile_image_url: Optional[str] = Field(None, description="Profile image URL")
    role: Literal["Admin", "User"] = Field("User", description="Access role")


class UserUpdate(CollectionModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    gender: Optional[Literal["Male", "Female"]] = None
    profile_image_url: Optional[str] = None
    role: Optional[Literal["Admin", "User"]] = None

    @field_validator("name", "email", "password", "gender", "role")
    @classmethod
    def required_not_null(cls, value):
        return _reject_null(value)


def validate_record(schema: Type[BaseModel], payload: Any, partial: bool = False,
                    model_name: Optional[str] = None) -> Dict[str, Any]:
    """Validate a payload and return the document to store.

    A complete record drops optional fields left empty. A partial record
    keeps only the fields present in the payload.
    """
    try:
        record = schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise RecordValidationError(model_name or schema.__name__, exc.errors()) from exc
    if partial:
        return record.model_dump(exclude_unset=True)
    return record.model_dump(exclude_none=True)
