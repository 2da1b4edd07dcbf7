"""Identifier generation for messages and content blocks."""

import uuid


def generate_id() -> str:
    """
    Generate a fresh opaque identifier.

    Message and block ids are minted here and never reused within a session.

    Returns:
        Random UUID v4 string

    Example:
        >>> generate_id()
        "f47ac10b-58cc-4372-a567-0e02b2c3d479"
    """
    return str(uuid.uuid4())
