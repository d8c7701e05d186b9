from datetime import date

from book_catalog.models import BookInstance
from helpers import count, fetch


def test_list_shows_book_title_and_status(client, catalog):
    body = client.get("/catalog/bookinstances/").get_data(as_text=True)
    assert "Book Instance List" in body
    assert "The Name of the Wind : DAW Books, 2007" in body
    assert "Available" in body


def test_detail_missing_copy_is_404(client):
    response = client.get("/catalog/bookinstances/999")
    assert response.status_code == 404
    assert "Book copy not found" in response.get_data(as_text=True)


def test_create_form_offers_books_and_statuses(client, catalog):
    body = client.get("/catalog/bookinstances/create").get_data(as_text=True)
    assert f'<option value="{catalog.fear}"' in body
    for status in ("Available", "Maintenance", "Loaned", "Reserved"):
        assert f'<option value="{status}"' in body


def test_create_copy_with_defaults(app, client, catalog):
    response = client.post("/catalog/bookinstances/create", data={
        "book_id": catalog.fear, "imprint": "DAW Books, 2011",
    })
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/catalog/bookinstances/")
    with app.app_context():
        copy = app.extensions["catalog_store"].instances_of_book(catalog.fear)[0]
        assert copy.status == "Maintenance"
        assert copy.due_back == date.today()


def test_create_invalid_marks_selected_book(app, client, catalog):
    response = client.post("/catalog/bookinstances/create", data={
        "book_id": catalog.fear, "imprint": "DA", "status": "Loaned", "due_back": "2030-01-01",
    })
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Imprint must be at least three characters long." in body
    assert f'<option value="{catalog.fear}" selected>' in body
    assert '<option value="Loaned" selected>' in body
    assert count(app, BookInstance) == 1


def test_update_copy(app, client, catalog):
    body = client.get(f"/catalog/bookinstances/{catalog.copy}/update").get_data(as_text=True)
    assert f'<option value="{catalog.wind}" selected>' in body

    response = client.post(f"/catalog/bookinstances/{catalog.copy}/update", data={
        "book_id": catalog.fear, "imprint": "DAW Books, 2011", "status": "Loaned", "due_back": "2030-01-01",
    })
    assert response.status_code == 302
    copy = fetch(app, BookInstance, catalog.copy)
    assert (copy.book_id, copy.status, copy.due_back) == (catalog.fear, "Loaned", date(2030, 1, 1))


def test_update_without_book_keeps_copy(app, client, catalog):
    response = client.post(f"/catalog/bookinstances/{catalog.copy}/update", data={"imprint": "Gollancz"})
    assert response.status_code == 200
    assert "Book must be specified" in response.get_data(as_text=True)
    copy = fetch(app, BookInstance, catalog.copy)
    assert (copy.book_id, copy.imprint) == (catalog.wind, "DAW Books, 2007")


def test_delete_copy(app, client, catalog):
    body = client.get(f"/catalog/bookinstances/{catalog.copy}/delete").get_data(as_text=True)
    assert f'name="bookinstanceid" value="{catalog.copy}"' in body

    response = client.post(f"/catalog/bookinstances/{catalog.copy}/delete",
                           data={"bookinstanceid": catalog.copy})
    assert response.status_code == 302
    assert fetch(app, BookInstance, catalog.copy) is None


def test_delete_missing_copy_is_404(client):
    assert client.post("/catalog/bookinstances/999/delete", data={"bookinstanceid": 999}).status_code == 404
