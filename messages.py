"""
Response Messages

Human-readable texts placed in the "message" field of every response
envelope. English is the default; Indonesian keeps the wording the API was
first published with.
"""

from typing import Dict

WELCOME = "Welcome to the Online Bookstore API!"

_ENGLISH_NOUNS = {
    "book": ("book", "books"),
    "transaction": ("transaction", "transactions"),
    "user": ("user", "users"),
}

_INDONESIAN_NOUNS = {
    "book": "buku",
    "transaction": "transaksi",
    "user": "pengguna",
}


def _english(resource: str) -> Dict[str, str]:
    singular, plural = _ENGLISH_NOUNS[resource]
    title = singular.capitalize()
    return {
        "created": f"{title} added successfully!",
        "create_failed": f"Failed to add {singular}",
        "listed": f"{plural.capitalize()} retrieved successfully",
        "list_failed": f"Failed to retrieve {plural}",
        "fetched": f"{title} retrieved successfully",
        "fetch_failed": f"Failed to retrieve {singular}",
        "updated": f"{title} updated successfully",
        "update_failed": f"Failed to update {singular}",
        "deleted": f"{title} deleted successfully",
        "delete_failed": f"Failed to delete {singular}",
        "not_found": f"{title} not found",
    }


def _indonesian(resource: str) -> Dict[str, str]:
    noun = _INDONESIAN_NOUNS[resource]
    title = noun.capitalize()
    return {
        "created": f"{title} berhasil ditambahkan!",
        "create_failed": f"Gagal menambahkan {noun}",
        "listed": f"Data {noun} berhasil diambil",
        "list_failed": f"Gagal mengambil data {noun}",
        "fetched": f"Data {noun} berhasil diambil",
        "fetch_failed": f"Gagal mengambil data {noun}",
        "updated": f"{title} berhasil diupdate",
        "update_failed": f"Gagal mengupdate {noun}",
        "deleted": f"{title} berhasil dihapus",
        "delete_failed": f"Gagal menghapus {noun}",
        "not_found": f"{title} tidak ditemukan",
    }


_BUILDERS = {"en": _english, "id": _indonesian}

INVALID_BODY = {"en": "Invalid request body", "id": "Body permintaan tidak valid"}


def catalog(language: str) -> Dict[str, Dict[str, str]]:
    """Messages for every resource in the given language, keyed by resource."""
    build = _BUILDERS[language]
    return {resource: build(resource) for resource in _ENGLISH_NOUNS}
