from datetime import date
from types import SimpleNamespace

import pytest

from book_catalog import create_app
from book_catalog.config import TestConfig
from book_catalog.extensions import db
from book_catalog.models import Author, Book, BookInstance, Genre


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    with app.app_context():
        yield app.extensions["catalog_store"]


@pytest.fixture
def catalog(app):
    """Two authors and genres; Rothfuss has two books, Asimov none."""
    with app.app_context():
        rothfuss = Author(first_name="Patrick", family_name="Rothfuss", date_of_birth=date(1973, 6, 6))
        asimov = Author(first_name="Isaac", family_name="Asimov")
        fantasy = Genre(name="Fantasy")
        poetry = Genre(name="Poetry")
        wind = Book(title="The Name of the Wind", summary="Kvothe, part one.", isbn="9780756404741",
                    author=rothfuss, genres=[fantasy])
        fear = Book(title="The Wise Man's Fear", summary="Kvothe, part two.", isbn="9780756407919",
                    author=rothfuss, genres=[fantasy])
        copy = BookInstance(book=wind, imprint="DAW Books, 2007", status="Available")
        db.session.add_all([rothfuss, asimov, fantasy, poetry, wind, fear, copy])
        db.session.commit()
        return SimpleNamespace(
            rothfuss=rothfuss.id, asimov=asimov.id, fantasy=fantasy.id, poetry=poetry.id,
            wind=wind.id, fear=fear.id, copy=copy.id,
        )

