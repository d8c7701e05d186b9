import bleach
from dateutil.parser import isoparse
from flask_wtf import FlaskForm
from wtforms import DateField, SelectField, SelectMultipleField, StringField, TextAreaField
from wtforms.validators import AnyOf, DataRequired, Length, Optional, Regexp

from .models import DEFAULT_STATUS, STATUSES


# --- Sanitizers ---
def strip_filter(value):
    return value.strip() if isinstance(value, str) else value


def escape_markup(field):
    """Escape markup-significant characters in place (no tags allowed)."""
    if field.data:
        field.data = bleach.clean(field.data, tags=set(), strip=False)


class IsoDateField(DateField):
    """Date field accepting any ISO-8601 date or datetime string."""

    def __init__(self, label=None, validators=None, invalid_message="Invalid date", **kwargs):
        super().__init__(label, validators, format="%Y-%m-%d", **kwargs)
        self.invalid_message = invalid_message

    def process_formdata(self, valuelist):
        if not valuelist or not valuelist[0].strip():
            self.data = None
            return
        try:
            self.data = isoparse(valuelist[0].strip()).date()
        except (ValueError, OverflowError):
            self.data = None
            raise ValueError(self.invalid_message)


def form_errors(form):
    """Ordered ``[{"field", "msg"}]`` list holding the first error of each field."""
    return [{"field": field.name, "msg": field.errors[0]} for field in form if field.errors]


class CatalogForm(FlaskForm):
    # Form fields copied onto the entity
    entity_fields = ()

    def entity_data(self):
        return {name: self[name].data for name in self.entity_fields}


# --- Forms ---
class AuthorForm(CatalogForm):
    entity_fields = ("first_name", "family_name", "date_of_birth", "date_of_death")

    first_name = StringField("First Name", filters=[strip_filter], validators=[
        Length(min=3, message="First name must be specified."),
        Regexp(r"^[A-Za-z0-9]+$", message="First name has non-alphanumeric characters."),
    ])
    family_name = StringField("Family Name", filters=[strip_filter], validators=[
        Length(min=3, message="Family name must be specified."),
        Regexp(r"^[A-Za-z0-9]+$", message="Family name has non-alphanumeric characters."),
    ])
    date_of_birth = IsoDateField("Date of birth", [Optional()], invalid_message="Invalid date of birth")
    date_of_death = IsoDateField("Date of death", [Optional()], invalid_message="Invalid date of death")

    def validate_first_name(form, field):
        escape_markup(field)

    def validate_family_name(form, field):
        escape_markup(field)


class GenreForm(CatalogForm):
    entity_fields = ("name",)

    name = StringField("Genre", filters=[strip_filter], validators=[
        Length(min=3, message="Genre name must contain at least 3 characters"),
        Length(max=100, message="Genre name must contain at most 100 characters"),
    ])

    def validate_name(form, field):
        escape_markup(field)


class BookForm(CatalogForm):
    """Author and genre choices are filled in by the view before validation."""

    entity_fields = ("title", "author_id", "summary", "isbn")

    title = StringField("Title", filters=[strip_filter], validators=[
        Length(min=1, message="Title must not be empty."),
    ])
    author_id = SelectField("Author", coerce=int, choices=[], validators=[
        DataRequired(message="Author must not be empty."),
    ])
    summary = TextAreaField("Summary", filters=[strip_filter], validators=[
        Length(min=1, message="Summary must not be empty."),
    ])
    isbn = StringField("ISBN", filters=[strip_filter], validators=[
        Length(min=1, message="ISBN must not be empty."),
    ])
    genre = SelectMultipleField("Genre", coerce=int, choices=[])

    def validate_title(form, field):
        escape_markup(field)

    def validate_summary(form, field):
        escape_markup(field)

    def validate_isbn(form, field):
        escape_markup(field)


class BookInstanceForm(CatalogForm):
    entity_fields = ("book_id", "imprint", "status", "due_back")

    book_id = SelectField("Book", coerce=int, choices=[], validators=[
        DataRequired(message="Book must be specified"),
    ])
    imprint = StringField("Imprint", filters=[strip_filter], validators=[
        Length(min=3, message="Imprint must be at least three characters long."),
    ])
    status = SelectField("Status", choices=[(s, s) for s in STATUSES], default=DEFAULT_STATUS,
                         validate_choice=False,
                         validators=[AnyOf(STATUSES, message="Invalid status")])
    due_back = IsoDateField("Date when book available", [Optional()], invalid_message="Invalid date")

    def validate_imprint(form, field):
        escape_markup(field)
