import logging

from book_catalog import create_app
from book_catalog.config import TestConfig
from book_catalog.models import Author, Book, BookInstance, Genre
from helpers import count


def test_create_app_accepts_mapping_overrides():
    app = create_app({"TESTING": True, "SQLALCHEMY_DATABASE_URI": "sqlite://", "SECRET_KEY": "x"})
    assert app.config["SECRET_KEY"] == "x"
    assert "catalog_store" in app.extensions


def test_boot_logs_database_connection(caplog):
    with caplog.at_level(logging.INFO, logger="book_catalog"):
        create_app(TestConfig)
    assert any("Connected to database" in r.getMessage() for r in caplog.records)


def test_not_found_page(client):
    response = client.get("/catalog/nowhere")
    assert response.status_code == 404
    assert "404" in response.get_data(as_text=True)


def test_method_not_allowed(client):
    assert client.post("/catalog/authors/").status_code == 405


def test_security_headers(client):
    response = client.get("/catalog/genres/")
    assert "Content-Security-Policy" in response.headers
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_flash_after_create(client):
    response = client.post("/catalog/genres/create", data={"name": "Fantasy"}, follow_redirects=True)
    assert "Genre created." in response.get_data(as_text=True)


def test_init_db_seeds_once(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["init-db"])
    assert "Initialized catalog" in result.output
    assert count(app, Author) == 2
    assert count(app, Genre) == 2
    assert count(app, Book) == 2
    assert count(app, BookInstance) == 3

    result = runner.invoke(args=["init-db"])
    assert "already initialized" in result.output
    assert count(app, Author) == 2
