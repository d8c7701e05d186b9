import logging

from flask import Blueprint, abort, flash, redirect, render_template, request, url_for

from ..forms import AuthorForm, form_errors
from ..models import Author
from . import get_store, require_body_id

logger = logging.getLogger(__name__)

bp = Blueprint("authors", __name__, url_prefix="/catalog/authors")


def _author_or_404(store, author_id):
    author = store.find_by_id(Author, author_id)
    if author is None:
        abort(404, description="Author not found")
    return author


@bp.route("/")
def index():
    authors = get_store().find(Author, order_by=Author.family_name)
    return render_template("author/list.html", title="Author List", author_list=authors)


@bp.route("/<int:author_id>")
def show(author_id):
    store = get_store()
    author = _author_or_404(store, author_id)
    return render_template("author/detail.html", title="Author Detail", author=author,
                           author_books=store.books_by_author(author_id))


@bp.route("/create", methods=["GET", "POST"])
def create():
    form = AuthorForm()
    if form.validate_on_submit():
        get_store().insert(Author(**form.entity_data()))
        flash("Author created.", "success")
        return redirect(url_for(".index"))
    author = Author(**form.entity_data()) if form.is_submitted() else None
    return render_template("author/form.html", title="Create Author", form=form, author=author,
                           errors=form_errors(form))


@bp.route("/<int:author_id>/update", methods=["GET", "POST"])
def update(author_id):
    store = get_store()
    author = _author_or_404(store, author_id)
    form = AuthorForm(obj=author if request.method == "GET" else None)
    if form.validate_on_submit():
        store.update_by_id(Author, author_id, form.entity_data())
        flash("Author updated.", "success")
        return redirect(url_for(".index"))
    if form.is_submitted():
        author = Author(**form.entity_data())
    return render_template("author/form.html", title="Update Author", form=form, author=author,
                           errors=form_errors(form))


@bp.route("/<int:author_id>/delete", methods=["GET", "POST"])
def delete(author_id):
    store = get_store()
    author = _author_or_404(store, author_id)
    author_books = store.books_by_author(author_id)
    if request.method == "POST":
        require_body_id("authorid", author_id)
        if not author_books:
            store.delete_by_id(Author, author_id)
            flash("Author deleted.", "success")
            return redirect(url_for(".index"))
        logger.info("Refusing to delete %r: %d dependent book(s)", author, len(author_books))
    return render_template("author/delete.html", title="Delete Author", author=author,
                           author_books=author_books)
