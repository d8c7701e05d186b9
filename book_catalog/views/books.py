from flask import Blueprint, abort, flash, redirect, render_template, request, url_for

from ..forms import BookForm, form_errors
from ..models import Author, Book, Genre
from . import get_store, require_body_id

bp = Blueprint("books", __name__, url_prefix="/catalog/books")


def _book_or_404(store, book_id):
    book = store.find_by_id(Book, book_id)
    if book is None:
        abort(404, description="Book not found")
    return book


def _load_choices(store, form):
    """Fill the author/genre choices; returns the lists for the template."""
    authors = store.find(Author, order_by=Author.family_name)
    genres = store.find(Genre, order_by=Genre.name)
    form.author_id.choices = [(a.id, a.name) for a in authors]
    form.genre.choices = [(g.id, g.name) for g in genres]
    return authors, genres


def _book_values(store, form):
    values = form.entity_data()
    values["genres"] = store.find_by_ids(Genre, form.genre.data or [])
    return values


def _render_form(form, title, authors, genres, book=None):
    if form.is_submitted():
        book = Book(**form.entity_data())
    return render_template("book/form.html", title=title, form=form, book=book,
                           authors=authors, genres=genres,
                           selected_genres=form.genre.data or [], errors=form_errors(form))


@bp.route("/")
def index():
    books = get_store().find(Book, order_by=Book.title)
    return render_template("book/list.html", title="Book List", book_list=books)


@bp.route("/<int:book_id>")
def show(book_id):
    store = get_store()
    book = _book_or_404(store, book_id)
    return render_template("book/detail.html", title=book.title, book=book,
                           book_instances=store.instances_of_book(book_id))


@bp.route("/create", methods=["GET", "POST"])
def create():
    store = get_store()
    form = BookForm()
    authors, genres = _load_choices(store, form)
    if form.validate_on_submit():
        store.insert(Book(**_book_values(store, form)))
        flash("Book created.", "success")
        return redirect(url_for(".index"))
    return _render_form(form, "Create Book", authors, genres)


@bp.route("/<int:book_id>/update", methods=["GET", "POST"])
def update(book_id):
    store = get_store()
    book = _book_or_404(store, book_id)
    if request.method == "GET":
        form = BookForm(obj=book, genre=[g.id for g in book.genres])
    else:
        form = BookForm()
    authors, genres = _load_choices(store, form)
    if form.validate_on_submit():
        store.update_by_id(Book, book_id, _book_values(store, form))
        flash("Book updated.", "success")
        return redirect(url_for(".index"))
    return _render_form(form, "Update Book", authors, genres, book)


@bp.route("/<int:book_id>/delete", methods=["GET", "POST"])
def delete(book_id):
    store = get_store()
    book = _book_or_404(store, book_id)
    if request.method == "POST":
        require_body_id("bookid", book_id)
        store.delete_by_id(Book, book_id)
        flash("Book deleted.", "success")
        return redirect(url_for(".index"))
    return render_template("book/delete.html", title="Delete Book", book=book,
                           book_instances=store.instances_of_book(book_id))
