import unicodedata
from datetime import date

from sqlalchemy.orm import validates

from .extensions import db

STATUSES = ["Available", "Maintenance", "Loaned", "Reserved"]
DEFAULT_STATUS = "Maintenance"


def fold_name(value):
    """Case- and accent-insensitive key for a name ("Ficción" -> "ficcion")."""
    decomposed = unicodedata.normalize("NFKD", value or "")
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def medium_date(value):
    # e.g. "Jun 6, 1973"
    if value is None:
        return ""
    return f"{value:%b} {value.day}, {value.year}"


def iso_date(value):
    return value.isoformat() if value else ""


book_genres = db.Table(
    "book_genres",
    db.Column("book_id", db.Integer, db.ForeignKey("books.id"), primary_key=True),
    db.Column("genre_id", db.Integer, db.ForeignKey("genres.id"), primary_key=True, index=True),
)


class Author(db.Model):
    __tablename__ = "authors"
    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    family_name = db.Column(db.String(100), nullable=False, index=True)
    date_of_birth = db.Column(db.Date)
    date_of_death = db.Column(db.Date)

    @property
    def name(self):
        if self.first_name and self.family_name:
            return f"{self.family_name}, {self.first_name}"
        return ""

    @property
    def life_span(self):
        if not self.date_of_birth:
            return ""
        return f"{medium_date(self.date_of_birth)} - {medium_date(self.date_of_death)}"

    @property
    def date_of_birth_iso(self):
        return iso_date(self.date_of_birth)

    @property
    def date_of_death_iso(self):
        return iso_date(self.date_of_death)

    def __repr__(self):
        return f"<Author {self.id} {self.name!r}>"


class Genre(db.Model):
    __tablename__ = "genres"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    # Lookup key for duplicate detection, kept in sync with name
    name_key = db.Column(db.String(255), nullable=False, index=True)

    @validates("name")
    def _sync_name_key(self, key, value):
        self.name_key = fold_name(value)
        return value

    def __repr__(self):
        return f"<Genre {self.id} {self.name!r}>"


class Book(db.Model):
    __tablename__ = "books"
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False, index=True)
    summary = db.Column(db.Text, nullable=False)
    isbn = db.Column(db.String(64), nullable=False)
    author_id = db.Column(db.Integer, db.ForeignKey("authors.id"), nullable=False, index=True)

    author = db.relationship("Author")
    genres = db.relationship("Genre", secondary=book_genres, order_by="Genre.name")

    def __repr__(self):
        return f"<Book {self.id} {self.title!r}>"


class BookInstance(db.Model):
    __tablename__ = "book_instances"
    id = db.Column(db.Integer, primary_key=True)
    # Copies outlive their book; the reference is cleared when it is deleted
    book_id = db.Column(db.Integer, db.ForeignKey("books.id", ondelete="SET NULL"), index=True)
    imprint = db.Column(db.String(255), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=DEFAULT_STATUS)
    due_back = db.Column(db.Date, nullable=False, default=date.today)

    book = db.relationship("Book")

    @property
    def due_back_formatted(self):
        return medium_date(self.due_back)

    @property
    def due_back_iso(self):
        return iso_date(self.due_back)

    def __repr__(self):
        return f"<BookInstance {self.id} {self.imprint!r}>"
