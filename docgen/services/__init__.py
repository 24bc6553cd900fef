"""
Service layer for document generation.

Contains the core business logic for producing CSV and XLSX documents,
decoupled from transport layers (HTTP/MCP).
"""

from docgen.services.document_service import DocumentService

__all__ = [
    "DocumentService",
]
