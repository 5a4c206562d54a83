"""
MCP server for budget flow editing.

Exposes a budget store and its flow graph through the Model Context Protocol.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from budget_flow_mcp.core.document import load_document
from budget_flow_mcp.core.exceptions import BudgetFlowError
from budget_flow_mcp.core.store import BudgetStore
from budget_flow_mcp.tools.tools import BudgetFlowTools, create_tool_schemas

logger = logging.getLogger(__name__)


def load_store(document_path: Optional[Path] = None) -> BudgetStore:
    """
    Create the budget store for the server.

    Args:
        document_path: Optional budget document. If it does not exist yet
                      the store starts from the default budget.

    Raises:
        DocumentValidationError: If the document exists but is invalid
    """
    store = BudgetStore.from_seed()
    if document_path is not None and document_path.exists():
        store.import_document(load_document(document_path))
    elif document_path is not None:
        logger.info(f"No budget document at {document_path}, starting from defaults")
    return store


class BudgetFlowServer:
    """MCP server for budget flow data."""

    def __init__(self, document_path: Optional[Path] = None):
        """
        Initialize the MCP server.

        Args:
            document_path: Optional path to a JSON budget document.
                          If None, the default budget is used and saving is disabled.
        """
        self.store = load_store(document_path)
        self.tools = BudgetFlowTools(self.store, document_path)
        self.tool_names = {schema["name"] for schema in create_tool_schemas()}
        self.server = Server("budget-flow-mcp")

        # Register handlers
        self._register_handlers()

    def dispatch(self, name: str, arguments: Optional[dict[str, Any]] = None) -> list[TextContent]:
        """
        Run a tool by name and format its result.

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            A single text content item holding JSON or an error message
        """
        if name not in self.tool_names:
            return [TextContent(type="text", text=f"Unknown tool: {name}")]

        try:
            result = getattr(self.tools, name)(**(arguments or {}))
            return [TextContent(type="text", text=json.dumps(result, indent=2))]

        except (ValueError, BudgetFlowError) as e:
            # Handle validation errors (e.g., unknown category, invalid document)
            return [TextContent(type="text", text=f"Error: {str(e)}")]
        except Exception as e:
            logger.exception(f"Error executing tool {name}")
            return [
                TextContent(
                    type="text",
                    text=f"Error executing tool: {str(e)}",
                )
            ]

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """List available tools."""
            schemas = create_tool_schemas()
            return [
                Tool(
                    name=schema["name"],
                    description=schema["description"],
                    inputSchema=schema["inputSchema"],
                )
                for schema in schemas
            ]

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            """Handle tool calls."""
            return self.dispatch(name, arguments)

    async def run(self) -> None:  # pragma: no cover
        """Run the MCP server using stdio transport."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


async def run_server(document_path: Optional[Path] = None) -> None:  # pragma: no cover
    """
    Run the Budget Flow MCP server.

    Args:
        document_path: Optional path to a JSON budget document.
    """
    server = BudgetFlowServer(document_path)
    await server.run()
