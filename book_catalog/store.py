"""
Persistence layer for the catalog.

``CatalogStore`` wraps a SQLAlchemy session and is the only thing the views
talk to. The application factory builds one and puts it in
``app.extensions["catalog_store"]``; tests can build their own around any
session.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from .models import Book, BookInstance, Genre, book_genres, fold_name

logger = logging.getLogger(__name__)


class CatalogStore:
    def __init__(self, session):
        self.session = session

    # -----------------------
    # Generic operations
    # -----------------------
    def find(self, model, order_by=None, **filters):
        """Return every ``model`` row matching the equality ``filters``."""
        stmt = select(model).filter_by(**filters)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        return self.session.scalars(stmt).all()

    def find_by_id(self, model, ident):
        return self.session.get(model, ident)

    def find_by_ids(self, model, idents):
        if not idents:
            return []
        stmt = select(model).where(model.id.in_(idents)).order_by(model.id)
        return self.session.scalars(stmt).all()

    def insert(self, entity):
        self.session.add(entity)
        self._commit("Created", entity)
        return entity

    def update_by_id(self, model, ident, values):
        """Replace every field in ``values`` on the stored row.

        Returns the updated entity, or None when nothing has that id.
        """
        entity = self.find_by_id(model, ident)
        if entity is None:
            return None
        for field, value in values.items():
            setattr(entity, field, value)
        self._commit("Updated", entity)
        return entity

    def delete_by_id(self, model, ident):
        entity = self.find_by_id(model, ident)
        if entity is None:
            return False
        label = repr(entity)
        self.session.delete(entity)
        self._commit("Deleted", entity, label)
        return True

    # -----------------------
    # Foreign-key lookups
    # -----------------------
    def books_by_author(self, author_id):
        return self.find(Book, order_by=Book.title, author_id=author_id)

    def books_in_genre(self, genre_id):
        stmt = (
            select(Book)
            .join(book_genres, book_genres.c.book_id == Book.id)
            .where(book_genres.c.genre_id == genre_id)
            .order_by(Book.title)
        )
        return self.session.scalars(stmt).all()

    def instances_of_book(self, book_id):
        return self.find(BookInstance, order_by=BookInstance.id, book_id=book_id)

    def book_instances_by_title(self):
        # Outer join so copies of a deleted book still show up (last)
        stmt = (
            select(BookInstance)
            .outerjoin(Book, BookInstance.book_id == Book.id)
            .order_by(Book.title.is_(None), Book.title, BookInstance.id)
        )
        return self.session.scalars(stmt).all()

    def find_genre_by_name(self, name):
        """First genre whose name equals ``name`` ignoring case and accents."""
        stmt = select(Genre).where(Genre.name_key == fold_name(name)).order_by(Genre.id).limit(1)
        return self.session.scalars(stmt).first()

    def _commit(self, action, entity, label=None):
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Database error: %s %s failed", action.lower(), label or type(entity).__name__)
            raise
        # Deleted rows can't be reloaded, so callers pass their label in
        logger.info("%s %s", action, label or repr(entity))
