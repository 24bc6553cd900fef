"""
MCP (Model Context Protocol) server for document generation.

This module implements an MCP server that exposes CSV and XLSX generation
as tools that can be called by AI agents. Documents are generated through
the same DocumentService as the REST API and saved to a path on disk.

MCP Tools:
    - generate_csv: Write a CSV document to a file
    - generate_excel: Write an XLSX document to a file

Example:
    To run the MCP server:
        python -m docgen.mcp_server

    Or programmatically:
        from docgen.mcp_server import run_mcp_server
        run_mcp_server()
"""

import asyncio
import json
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import (
    TextContent,
    Tool,
)
from pydantic import ValidationError

from docgen.exceptions.document_exceptions import DocumentServiceError
from docgen.models.document_models import DelimitedRequest, SpreadsheetRequest, StyleSet
from docgen.services.document_service import DocumentService

logger = logging.getLogger(__name__)

_TABLE_PROPERTIES = {
    "headers": {
        "type": "array",
        "items": {"type": "string"},
        "description": "Column headers",
    },
    "rows": {
        "type": "array",
        "items": {"type": "array"},
        "description": "Data rows; each row needs one value per header",
    },
    "output_path": {
        "type": "string",
        "description": "Path where the document will be written",
    },
    "filename": {
        "type": "string",
        "description": "Logical filename reported with the document",
    },
    "overwrite": {
        "type": "boolean",
        "description": "Whether to overwrite an existing file",
        "default": False,
    },
}

_STYLE_SCHEMA = {
    "type": "object",
    "properties": {
        "bold": {"type": "boolean"},
        "font_size": {"type": "number"},
        "font_color": {"type": "string"},
        "background": {"type": "string"},
        "alignment": {"type": "string", "enum": ["left", "center", "right"]},
    },
}


class MCPDocumentServer:
    """
    MCP server implementation for document generation.

    This class wraps the DocumentService and exposes it through the MCP
    protocol.

    Attributes:
        service: The underlying DocumentService instance.
        server: The MCP Server instance.

    Example:
        mcp_server = MCPDocumentServer()
        await mcp_server.run()
    """

    def __init__(self, service: DocumentService | None = None) -> None:
        """
        Initialize the MCP Document Server.

        Args:
            service: Optional DocumentService instance. If None, creates a new one.
        """
        self.service = service or DocumentService()
        self.server = Server("docgen-mcp-server")
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Set up MCP request handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """Return the list of available document tools."""
            return self._get_tools()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            """Execute a tool and return the result."""
            result = await self._execute_tool(name, arguments)
            return [TextContent(type="text", text=json.dumps(result, default=str, indent=2))]

    def _get_tools(self) -> list[Tool]:
        """
        Get the list of available document tools.

        Returns:
            List of MCP Tool definitions.
        """
        return [
            Tool(
                name="generate_csv",
                description=(
                    "Generate a CSV document from headers and rows and write it "
                    "to a file. Fields containing the delimiter, quotes or line "
                    "breaks are quoted."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        **_TABLE_PROPERTIES,
                        "delimiter": {
                            "type": "string",
                            "description": "Single-character delimiter (default ',')",
                        },
                    },
                    "required": ["headers", "rows", "output_path"],
                },
            ),
            Tool(
                name="generate_excel",
                description=(
                    "Generate a single-sheet XLSX document from headers and rows "
                    "and write it to a file. Numbers and booleans keep their "
                    "native cell types."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        **_TABLE_PROPERTIES,
                        "sheet_name": {
                            "type": "string",
                            "description": "Sheet name (default 'Sheet1')",
                        },
                        "auto_size": {
                            "type": "boolean",
                            "description": "Give every column a fixed readable width",
                            "default": True,
                        },
                        "styles": {
                            "type": "object",
                            "properties": {
                                "header_style": _STYLE_SCHEMA,
                                "data_style": _STYLE_SCHEMA,
                            },
                            "description": "Optional header and data styles",
                        },
                    },
                    "required": ["headers", "rows", "output_path"],
                },
            ),
        ]

    async def _execute_tool(self, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """
        Execute a document tool.

        Args:
            name: The name of the tool to execute.
            arguments: The arguments to pass to the tool.

        Returns:
            Dictionary containing the tool execution result.
        """
        try:
            if name == "generate_csv":
                request = DelimitedRequest(
                    headers=arguments["headers"],
                    rows=arguments["rows"],
                    filename=arguments.get("filename"),
                    delimiter=arguments.get("delimiter"),
                )
                document = self.service.generate_csv(request)

            elif name == "generate_excel":
                styles = arguments.get("styles")
                request = SpreadsheetRequest(
                    headers=arguments["headers"],
                    rows=arguments["rows"],
                    filename=arguments.get("filename"),
                    sheet_name=arguments.get("sheet_name"),
                    auto_size=arguments.get("auto_size", True),
                    styles=StyleSet.model_validate(styles) if styles else None,
                )
                document = self.service.generate_excel(request)

            else:
                return {
                    "success": False,
                    "error": {
                        "error_code": "UNKNOWN_TOOL",
                        "message": f"Unknown tool: {name}",
                    },
                }

            result = self.service.save_document(
                document,
                arguments["output_path"],
                overwrite=arguments.get("overwrite", False),
            )
            return {"success": True, "data": result.model_dump()}

        except DocumentServiceError as e:
            return {
                "success": False,
                "error": e.to_dict(),
            }
        except (KeyError, ValidationError) as e:
            return {
                "success": False,
                "error": {
                    "error_code": "INVALID_ARGUMENTS",
                    "message": str(e),
                },
            }
        except Exception as e:
            logger.exception("Tool %s failed", name)
            return {
                "success": False,
                "error": {
                    "error_code": "INTERNAL_ERROR",
                    "message": str(e),
                },
            }

    async def run(self) -> None:
        """
        Run the MCP server using stdio transport.

        This method starts the server and blocks until it is terminated.
        It uses stdin/stdout for communication with the MCP client.
        """
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


def run_mcp_server() -> None:
    """
    Run the MCP document server.

    This is the entry point for running the MCP server from the command line.

    Example:
        python -m docgen.mcp_server
    """
    server = MCPDocumentServer()
    asyncio.run(server.run())


if __name__ == "__main__":
    run_mcp_server()
