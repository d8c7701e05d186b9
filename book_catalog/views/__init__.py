from flask import abort, current_app, request


def get_store():
    return current_app.extensions["catalog_store"]


def require_body_id(field, expected):
    """Reject a delete whose form body names a different record than the URL."""
    if request.form.get(field, type=int) != expected:
        abort(400, description="Submitted id does not match the requested record.")
