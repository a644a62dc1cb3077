import urllib.parse


def sanitize_field(field: str) -> str:
    """Escapes an identifier so it is safe to use as a single path segment."""
    return urllib.parse.quote(field.encode("UTF-8"), safe="")
