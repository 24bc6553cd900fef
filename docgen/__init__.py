"""
docgen: Tabular document generation service.

This package turns a header row plus rows of untyped values into CSV or
XLSX documents, exposed through both a REST API (FastAPI) and an MCP
(Model Context Protocol) server.

Architecture:
    - Service Layer pattern separating generation from transports
    - Standard library csv writer for delimited output
    - XlsxWriter for single-sheet workbooks
"""

__version__ = "1.0.0"
