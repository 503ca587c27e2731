from bson import ObjectId


def _create(client, payload):
    response = client.post("/books", json=payload)
    assert response.status_code == 201
    return response.json()["book"]


def test_create_book(client, book_payload):
    response = client.post("/books", json=book_payload)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Book added successfully!"
    book = body["book"]
    assert book["title"] == "Dune"
    assert book["author"] == "Herbert"
    assert book["price"] == 25
    assert ObjectId.is_valid(book["_id"])
    assert "cover_image" not in book


def test_create_then_get_returns_same_record(client, book_payload):
    created = _create(client, {**book_payload, "cover_image": "https://img/dune.jpg"})

    response = client.get(f"/books/{created['_id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Book retrieved successfully"
    assert body["book"] == created
    assert body["book"]["cover_image"] == "https://img/dune.jpg"


def test_create_ignores_unknown_fields(client, db, book_payload):
    created = _create(client, {**book_payload, "isbn": "123"})

    assert "isbn" not in created
    assert "isbn" not in db["books"].find_one({"_id": ObjectId(created["_id"])})


def test_create_missing_author_is_rejected(client, db):
    response = client.post("/books", json={"title": "Dune", "price": 25})

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Failed to add book"
    assert "author" in body["error"]
    assert body["error"].startswith("Book validation failed")
    assert db["books"].count_documents({}) == 0


def test_create_with_non_numeric_price_is_rejected(client):
    response = client.post("/books", json={"title": "Dune", "author": "Herbert", "price": "cheap"})

    assert response.status_code == 400
    assert "price" in response.json()["error"]


def test_list_empty_collection(client):
    response = client.get("/books")

    assert response.status_code == 200
    assert response.json() == {"message": "Books retrieved successfully", "books": []}


def test_list_returns_every_book(client, book_payload):
    first = _create(client, book_payload)
    second = _create(client, {"title": "Emma", "author": "Austen", "price": 12.5})

    response = client.get("/books")

    assert response.status_code == 200
    ids = [book["_id"] for book in response.json()["books"]]
    assert sorted(ids) == sorted([first["_id"], second["_id"]])


def test_get_missing_book(client):
    response = client.get(f"/books/{ObjectId()}")

    assert response.status_code == 404
    assert response.json() == {"message": "Book not found"}


def test_malformed_id_is_a_storage_error(client):
    response = client.get("/books/not-an-id")

    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "Failed to retrieve book"
    assert "not-an-id" in body["error"]


def test_update_with_malformed_id_is_rejected(client):
    response = client.put("/books/not-an-id", json={"price": 1})

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Failed to update book"
    assert "not-an-id" in body["error"]


def test_delete_with_malformed_id_fails(client):
    response = client.delete("/books/not-an-id")

    assert response.status_code == 500
    assert response.json()["message"] == "Failed to delete book"


def test_numeric_text_is_stored_as_string(client):
    created = _create(client, {"title": 1984, "author": "Orwell", "price": 9})

    assert created["title"] == "1984"


def test_partial_update_changes_only_given_fields(client, book_payload):
    created = _create(client, book_payload)

    response = client.put(f"/books/{created['_id']}", json={"price": 30})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Book updated successfully"
    assert body["book"]["price"] == 30
    assert body["book"]["title"] == "Dune"
    assert body["book"]["author"] == "Herbert"
    assert client.get(f"/books/{created['_id']}").json()["book"] == body["book"]


def test_update_with_empty_body_returns_record_unchanged(client, book_payload):
    created = _create(client, book_payload)

    response = client.put(f"/books/{created['_id']}", json={})

    assert response.status_code == 200
    assert response.json()["book"] == created


def test_update_missing_book(client):
    response = client.put(f"/books/{ObjectId()}", json={"price": 1})

    assert response.status_code == 404
    assert response.json()["message"] == "Book not found"


def test_update_with_bad_type_is_rejected(client, book_payload):
    created = _create(client, book_payload)

    response = client.put(f"/books/{created['_id']}", json={"price": "free"})

    assert response.status_code == 400
    assert response.json()["message"] == "Failed to update book"
    assert client.get(f"/books/{created['_id']}").json()["book"]["price"] == 25


def test_update_cannot_null_required_field(client, book_payload):
    created = _create(client, book_payload)

    response = client.put(f"/books/{created['_id']}", json={"title": None})

    assert response.status_code == 400
    assert "title" in response.json()["error"]


def test_delete_returns_removed_record(client, book_payload):
    created = _create(client, book_payload)

    response = client.delete(f"/books/{created['_id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Book deleted successfully"
    assert body["book"] == created


def test_get_after_delete_is_not_found(client, book_payload):
    created = _create(client, book_payload)
    client.delete(f"/books/{created['_id']}")

    assert client.get(f"/books/{created['_id']}").status_code == 404
    assert client.delete(f"/books/{created['_id']}").status_code == 404
