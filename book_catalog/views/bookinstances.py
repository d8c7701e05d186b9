from datetime import date

from flask import Blueprint, abort, flash, redirect, render_template, request, url_for

from ..forms import BookInstanceForm, form_errors
from ..models import STATUSES, Book, BookInstance
from . import get_store, require_body_id

bp = Blueprint("bookinstances", __name__, url_prefix="/catalog/bookinstances")


def _instance_or_404(store, instance_id):
    instance = store.find_by_id(BookInstance, instance_id)
    if instance is None:
        abort(404, description="Book copy not found")
    return instance


def _instance_values(form):
    values = form.entity_data()
    # No date given means the copy is due back today
    values["due_back"] = values["due_back"] or date.today()
    return values


def _render_form(form, title, books, bookinstance=None):
    if form.is_submitted():
        bookinstance = BookInstance(**form.entity_data())
    return render_template("bookinstance/form.html", title=title, form=form,
                           bookinstance=bookinstance, book_list=books, statuses=STATUSES,
                           selected_book=form.book_id.data, errors=form_errors(form))


def _load_books(store, form):
    books = store.find(Book, order_by=Book.title)
    form.book_id.choices = [(b.id, b.title) for b in books]
    return books


@bp.route("/")
def index():
    instances = get_store().book_instances_by_title()
    return render_template("bookinstance/list.html", title="Book Instance List",
                           bookinstance_list=instances)


@bp.route("/<int:instance_id>")
def show(instance_id):
    bookinstance = _instance_or_404(get_store(), instance_id)
    return render_template("bookinstance/detail.html", title="Book Copy", bookinstance=bookinstance)


@bp.route("/create", methods=["GET", "POST"])
def create():
    store = get_store()
    form = BookInstanceForm()
    books = _load_books(store, form)
    if form.validate_on_submit():
        store.insert(BookInstance(**_instance_values(form)))
        flash("Book copy created.", "success")
        return redirect(url_for(".index"))
    return _render_form(form, "Create BookInstance", books)


@bp.route("/<int:instance_id>/update", methods=["GET", "POST"])
def update(instance_id):
    store = get_store()
    bookinstance = _instance_or_404(store, instance_id)
    form = BookInstanceForm(obj=bookinstance if request.method == "GET" else None)
    books = _load_books(store, form)
    if form.validate_on_submit():
        store.update_by_id(BookInstance, instance_id, _instance_values(form))
        flash("Book copy updated.", "success")
        return redirect(url_for(".index"))
    return _render_form(form, "Update BookInstance", books, bookinstance)


@bp.route("/<int:instance_id>/delete", methods=["GET", "POST"])
def delete(instance_id):
    store = get_store()
    bookinstance = _instance_or_404(store, instance_id)
    if request.method == "POST":
        require_body_id("bookinstanceid", instance_id)
        store.delete_by_id(BookInstance, instance_id)
        flash("Book copy deleted.", "success")
        return redirect(url_for(".index"))
    return render_template("bookinstance/delete.html", title="Delete Book Instance",
                           bookinstance=bookinstance)
