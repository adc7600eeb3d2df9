"""Identifier helpers"""
import uuid
from typing import Optional


def generate_id() -> str:
    """Generate a new entity identifier"""
    return str(uuid.uuid4())


def canonical_id(value) -> Optional[str]:
    """Canonical lower-case hyphenated form of a UUID string, or None if it isn't one.

    ``uuid.UUID`` accepts several spellings (upper case, no hyphens, braces,
    ``urn:uuid:``); all of them map to the one value stored in the database.
    """
    if not isinstance(value, str):
        return None
    try:
        return str(uuid.UUID(value))
    except ValueError:
        return None


def is_valid_id(value) -> bool:
    """True if value is a structurally valid entity identifier (a UUID string)"""
    return canonical_id(value) is not None
