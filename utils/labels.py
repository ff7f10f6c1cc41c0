"""Registry-safe identifiers"""
import re

_INVALID = re.compile(r"[^a-z0-9-]+")


def label(value: str) -> str:
    """Lowercase a name and collapse characters outside [a-z0-9-] into single dashes.

    >>> label("Hello World")
    'hello-world'
    >>> label("api.example.com")
    'api-example-com'
    """
    return _INVALID.sub("-", value.lower()).strip("-")
