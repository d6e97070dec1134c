"""Post frontmatter schema, date coercion and validation."""

from datetime import date, datetime, timezone

from config import CATEGORIES

POST_SCHEMA = {
    "title":    {"type": str,  "required": True},
    "date":     {"type": date, "required": True},    # coerced, see coerce_date
    "category": {"type": str,  "required": True, "choices": CATEGORIES},
    "excerpt":  {"type": str,  "required": False},
    "cover":    {"type": str,  "required": False},   # path or URL
    "draft":    {"type": bool, "required": False, "default": False},
}


class ValidationFailure(Exception):
    """A content file does not conform to POST_SCHEMA."""

    def __init__(self, path: str, errors: list[dict]):
        self.path = path
        self.errors = errors
        details = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
        super().__init__(f"{path}: {details}")

    @property
    def fields(self) -> list[str]:
        return [e["field"] for e in self.errors]


def coerce_date(value) -> date:
    """Coerce a frontmatter value to a calendar date.

    Accepts date/datetime objects (YAML gives these for unquoted ISO values),
    epoch milliseconds, and ISO-8601 date or datetime strings.
    Raises ValueError if the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, bool):
        raise ValueError(f"cannot read {value!r} as a date")
    if isinstance(value, int | float):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"timestamp {value!r} out of range") from e
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            raise ValueError(f"cannot read {value!r} as a date") from None
    raise ValueError(f"cannot read {type(value).__name__} as a date")


def _check_field(field: str, spec: dict, value):
    """Return (coerced_value, error_message). error_message is None when valid."""
    if field == "date":
        try:
            return coerce_date(value), None
        except ValueError as e:
            return None, str(e)

    if not isinstance(value, spec["type"]):
        expected = spec["type"].__name__
        got = type(value).__name__
        return None, f"must be {expected}, got {got}"

    if spec["type"] is str and spec.get("required") and not value.strip():
        return None, "must not be empty"

    choices = spec.get("choices")
    if choices is not None and value not in choices:
        return None, f"must be one of {list(choices)}, got {value!r}"

    return value, None


def validate_post(fm: dict) -> tuple[dict | None, list[dict]]:
    """Validate frontmatter against POST_SCHEMA.

    Returns (record, []) on success and (None, errors) otherwise, where each
    error is {"field": ..., "message": ...}. All field errors are collected.
    Keys not in the schema are dropped from the record. An optional field
    given as an explicit null is a type error; only an absent key gets the default.
    """
    record = {}
    errors = []

    for field, spec in POST_SCHEMA.items():
        value = fm.get(field)
        if spec.get("required") and value is None:
            errors.append({"field": field, "message": "missing required field"})
            continue
        if field not in fm:
            record[field] = spec.get("default")
            continue

        coerced, message = _check_field(field, spec, value)
        if message:
            errors.append({"field": field, "message": message})
        else:
            record[field] = coerced

    if errors:
        return None, errors
    return record, []
