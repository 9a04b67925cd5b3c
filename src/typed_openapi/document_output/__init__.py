"""Document output exports."""

from .document_writer import DocumentOutputError, render_document, write_document

__all__ = ["DocumentOutputError", "render_document", "write_document"]
