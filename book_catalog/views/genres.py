import logging

from flask import Blueprint, abort, flash, redirect, render_template, request, url_for

from ..forms import GenreForm, form_errors
from ..models import Genre
from . import get_store, require_body_id

logger = logging.getLogger(__name__)

bp = Blueprint("genres", __name__, url_prefix="/catalog/genres")


def _genre_or_404(store, genre_id):
    genre = store.find_by_id(Genre, genre_id)
    if genre is None:
        abort(404, description="Genre not found")
    return genre


@bp.route("/")
def index():
    genres = get_store().find(Genre, order_by=Genre.name)
    return render_template("genre/list.html", title="Genre List", genre_list=genres)


@bp.route("/<int:genre_id>")
def show(genre_id):
    store = get_store()
    genre = _genre_or_404(store, genre_id)
    return render_template("genre/detail.html", title="Genre Detail", genre=genre,
                           genre_books=store.books_in_genre(genre_id))


@bp.route("/create", methods=["GET", "POST"])
def create():
    form = GenreForm()
    if form.validate_on_submit():
        store = get_store()
        # Same name ignoring case/accents: reuse the existing genre
        existing = store.find_genre_by_name(form.name.data)
        if existing is not None:
            logger.info("Genre %r already exists as %r", form.name.data, existing)
            return redirect(url_for(".show", genre_id=existing.id))
        store.insert(Genre(name=form.name.data))
        flash("Genre created.", "success")
        return redirect(url_for(".index"))
    genre = Genre(name=form.name.data) if form.is_submitted() else None
    return render_template("genre/form.html", title="Create Genre", form=form, genre=genre,
                           errors=form_errors(form))


@bp.route("/<int:genre_id>/update", methods=["GET", "POST"])
def update(genre_id):
    store = get_store()
    genre = _genre_or_404(store, genre_id)
    form = GenreForm(obj=genre if request.method == "GET" else None)
    if form.validate_on_submit():
        store.update_by_id(Genre, genre_id, form.entity_data())
        flash("Genre updated.", "success")
        return redirect(url_for(".index"))
    if form.is_submitted():
        genre = Genre(name=form.name.data)
    return render_template("genre/form.html", title="Update Genre", form=form, genre=genre,
                           errors=form_errors(form))


@bp.route("/<int:genre_id>/delete", methods=["GET", "POST"])
def delete(genre_id):
    store = get_store()
    genre = _genre_or_404(store, genre_id)
    genre_books = store.books_in_genre(genre_id)
    if request.method == "POST":
        require_body_id("genreid", genre_id)
        if not genre_books:
            store.delete_by_id(Genre, genre_id)
            flash("Genre deleted.", "success")
            return redirect(url_for(".index"))
        logger.info("Refusing to delete %r: %d dependent book(s)", genre, len(genre_books))
    return render_template("genre/delete.html", title="Delete Genre", genre=genre,
                           genre_books=genre_books)
