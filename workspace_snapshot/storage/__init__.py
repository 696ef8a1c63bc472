"""Storage package exposing JSON document persistence."""

from .document_store import DocumentStore

__all__ = ["DocumentStore"]
