from datetime import date

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import db
from .models import Author, Book, BookInstance, Genre


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Create the tables and add sample data (for dev only)."""
    db.create_all()
    store = current_app.extensions["catalog_store"]
    if store.find(Author):
        click.echo("Catalog already initialized.")
        return

    rothfuss = Author(first_name="Patrick", family_name="Rothfuss", date_of_birth=date(1973, 6, 6))
    asimov = Author(first_name="Isaac", family_name="Asimov", date_of_birth=date(1920, 1, 2),
                    date_of_death=date(1992, 4, 6))
    fantasy = Genre(name="Fantasy")
    scifi = Genre(name="Science Fiction")
    db.session.add_all([rothfuss, asimov, fantasy, scifi])

    wind = Book(title="The Name of the Wind", author=rothfuss, isbn="9781473211896",
                summary="A hero tells the story of his life.", genres=[fantasy])
    foundation = Book(title="Foundation", author=asimov, isbn="9780553293357",
                      summary="The fall of a galactic empire and a plan to shorten the dark age.",
                      genres=[scifi])
    db.session.add_all([wind, foundation])
    db.session.add_all([
        BookInstance(book=wind, imprint="Gollancz, 2011", status="Available"),
        BookInstance(book=foundation, imprint="Bantam, 1991", status="Loaned", due_back=date(2030, 1, 1)),
        BookInstance(book=foundation, imprint="Bantam, 1991"),
    ])
    db.session.commit()
    click.echo("Initialized catalog with sample data.")
