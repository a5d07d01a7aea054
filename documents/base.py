"""Errors raised by document operations."""


class DocumentError(Exception):
    """Base exception for document operations."""
    pass
