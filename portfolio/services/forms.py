"""
Request binding - turns JSON bodies or multipart forms into clean column values
"""

from portfolio.exceptions import ValidationException
from portfolio.utils import parse_bool, parse_date, parse_datetime

_MISSING = object()


class Field:
    """One accepted request field"""

    def __init__(
        self,
        name,
        kind=str,
        required=False,
        default=_MISSING,
        min_value=None,
        max_value=None,
        choices=None,
        max_length=None,
        nullable=True,
    ):
        self.name = name
        self.kind = kind
        self.required = required
        self.default = default
        self.min_value = min_value
        self.max_value = max_value
        self.choices = choices
        self.max_length = max_length
        self.nullable = nullable

    def _fail(self, message):
        raise ValidationException(f"{self.name}: {message}", field=self.name)

    def coerce(self, raw):
        if raw is None:
            if self.required:
                self._fail("is required")
            if not self.nullable:
                self._fail("may not be null")
            return None

        if self.kind is str:
            value = raw if isinstance(raw, str) else str(raw)
            if self.required and not value.strip():
                self._fail("is required")
            if self.max_length and len(value) > self.max_length:
                self._fail(f"must be at most {self.max_length} characters")
        elif self.kind is int:
            if isinstance(raw, bool):
                self._fail("must be an integer")
            if isinstance(raw, str) and not raw.strip():
                if self.required:
                    self._fail("is required")
                if not self.nullable:
                    self._fail("must be an integer")
                return None
            try:
                value = int(raw)
            except (TypeError, ValueError):
                self._fail("must be an integer")
        elif self.kind is bool:
            try:
                value = parse_bool(raw)
            except ValueError:
                self._fail("must be a boolean")
        elif self.kind == "date":
            if isinstance(raw, str) and not raw.strip():
                return None
            try:
                value = parse_date(raw)
            except ValueError:
                self._fail("must be a date in YYYY-MM-DD format")
        elif self.kind == "datetime":
            if isinstance(raw, str) and not raw.strip():
                return None
            try:
                value = parse_datetime(raw)
            except ValueError:
                self._fail("must be an ISO-8601 timestamp")
        else:
            value = raw

        if self.choices is not None and value not in self.choices:
            self._fail(f"must be one of {', '.join(self.choices)}")
        if self.min_value is not None and value < self.min_value:
            self._fail(f"must be at least {self.min_value}")
        if self.max_value is not None and value > self.max_value:
            self._fail(f"must be at most {self.max_value}")
        return value


def bind(payload, fields, partial=False):
    """
    Validate `payload` against `fields`.

    Full mode fills defaults and enforces required fields. Partial mode
    (updates) only returns the keys present in the payload.
    """
    if not isinstance(payload, dict):
        raise ValidationException("Request body must be an object")

    cleaned = {}
    for field in fields:
        if field.name in payload:
            cleaned[field.name] = field.coerce(payload[field.name])
        elif partial:
            continue
        elif field.default is not _MISSING:
            cleaned[field.name] = field.default() if callable(field.default) else field.default
        elif field.required:
            field.coerce(None)
    return cleaned


def tag_names_from(payload, key="tags"):
    """
    Read a tag list. Accepts a list of strings or {"name": ...} objects, a
    comma-separated string, or repeated form fields. Returns None when the
    key is absent so callers can tell "leave tags alone" from "clear tags".
    """
    if key not in payload:
        return None
    raw = payload[key]
    if raw is None:
        return []
    if isinstance(raw, str):
        return [part.strip() for part in raw.split(",") if part.strip()]
    if not isinstance(raw, (list, tuple)):
        raise ValidationException(f"{key}: must be a list of tag names", field=key)

    names = []
    for item in raw:
        if isinstance(item, dict):
            item = item.get("name")
        if not isinstance(item, str):
            raise ValidationException(f"{key}: every tag must be a name string", field=key)
        names.append(item)
    return names


def child_items(payload, key, item_fields):
    """Read a list of nested objects (achievements, responsibilities). None when absent."""
    if key not in payload:
        return None
    raw = payload[key]
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationException(f"{key}: must be a list", field=key)
    return [bind(item, item_fields) for item in raw]
