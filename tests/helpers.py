from book_catalog.extensions import db


def count(app, model):
    with app.app_context():
        return db.session.query(model).count()


def fetch(app, model, ident):
    """Load a row in a fresh context; returns None when it's gone."""
    with app.app_context():
        entity = db.session.get(model, ident)
        if entity is not None:
            db.session.expunge(entity)
        return entity
