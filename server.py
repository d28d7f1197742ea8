#!/usr/bin/env python3
"""
AI SDK 5 Migration MCP Server

An MCP server that helps AI agents migrate projects from AI SDK 4.x to 5.0.
Provides keyword search over the code and data migration guides, and a
migration checklist the agent downloads into the user's project.
"""

import logging
import os
from typing import Annotated, Literal

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from search_guide import (
    search_documentation,
    get_full_guide,
    get_full_data_guide,
    DocumentLoadError,
    UnknownCorpusError,
)
from create_checklist import (
    generate_checklist,
    create_checklist_instructions,
    load_conversion_functions,
    CONVERSION_FUNCTIONS_FILENAME,
)

# Configure logging
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger("migration-guide")

# Constants
SERVER_NAME = "ai-sdk-5-migration"
TRANSPORT = os.getenv("MCP_TRANSPORT", "stdio")  # "stdio" or "streamable-http"
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "3000"))
MAX_RESULTS = 5
MAX_QUERY_LENGTH = 500

# Initialize MCP server
app = FastMCP(SERVER_NAME, host=HOST, port=PORT)


# ============================================================================
# Tool Parameters (Pydantic v2)
# ============================================================================
# Tools take flat arguments ({"query": ..., "limit": ...}); FastMCP builds
# and validates the argument schema from these annotations.

GuideQuery = Annotated[str, Field(
    description='What to search for. Examples: "useChat", "maxSteps", "tools", "message structure", "streaming"',
    max_length=MAX_QUERY_LENGTH
)]

DataGuideQuery = Annotated[str, Field(
    description='What to search for. Examples: "conversion functions", "Phase 2", "dual write", "database migration", "v4 to v5"',
    max_length=MAX_QUERY_LENGTH
)]

ResultLimit = Annotated[int, Field(
    description="Maximum number of results to return (1-5)",
    ge=1,
    le=MAX_RESULTS
)]

ResponseFormat = Annotated[Literal["markdown", "json"], Field(
    description="Response format: 'markdown' for human-readable or 'json' for structured data"
)]


# ============================================================================
# Shared Utilities
# ============================================================================

def format_error(error: Exception, context: str) -> str:
    """
    Format error message for LLM consumption with actionable guidance.

    Args:
        error: The exception that occurred
        context: Context about what operation failed

    Returns:
        Human-readable error message with suggested next steps
    """
    if isinstance(error, UnknownCorpusError):
        error_msg = f"Error: Guide '{error.corpus}' not found.\n\n"
        error_msg += "Available guides:\n"
        error_msg += "\n".join(f"  - {name}" for name in sorted(error.available))
        return error_msg

    if isinstance(error, DocumentLoadError):
        error_msg = f"Error during {context}: the {error.corpus} document could not be loaded.\n\n"
        error_msg += f"Path: {error.path}\n\n"
        error_msg += "Suggestion: Check that the file exists and is UTF-8, or set "
        error_msg += "MIGRATION_GUIDE_PATH / MIGRATION_DATA_GUIDE_PATH to the guide files"
        return error_msg

    return f"Error during {context}: {str(error)}"


# ============================================================================
# Tool Implementations
# ============================================================================
@app.tool(
    name="create-checklist",
    description="""
    Creates an AI SDK 5 migration checklist file in the user's project by
    fetching it from the API.

    Check if AI_SDK_5_MIGRATION.md exists first - if it does, ask the user
    before overwriting.

    Returns step-by-step instructions for downloading and using the checklist.
    """,
    annotations=ToolAnnotations(readOnlyHint=True)
)
async def create_checklist() -> str:
    """
    Return instructions for creating the migration checklist.

    Returns:
        Instructions with the download command for the checklist
    """
    return create_checklist_instructions()


@app.tool(
    name="search-guide",
    description="""
    Search the AI SDK 5 migration guide for specific information about
    changes, APIs, or patterns.

    Returns relevant sections from the official migration guide. Every
    heading (##, ###, ####) is a separate, searchable section.

    **Parameters:**
    - `query`: What to search for (e.g., "useChat", "maxSteps", "streaming")
    - `limit`: Maximum number of results, 1-5 (default 3)
    - `format`: "markdown" (default) or "json"
    """,
    annotations=ToolAnnotations(readOnlyHint=True, idempotentHint=True)
)
async def search_guide_tool(
    query: GuideQuery,
    limit: ResultLimit = 3,
    format: ResponseFormat = "markdown"
) -> str:
    """
    Keyword search over the code migration guide.

    Args:
        query: Free-text query
        limit: Number of results to show
        format: "markdown" or "json"

    Returns:
        Top matching sections or a no-results message with suggestions
    """
    try:
        return await search_documentation(
            corpus="guide",
            query=query,
            limit=limit,
            response_format=format
        )
    except Exception as e:
        error_msg = format_error(e, "searching the migration guide")
        logger.error(error_msg)
        return error_msg


@app.tool(
    name="search-data-guide",
    description="""
    Search the AI SDK 5 data migration guide for information about migrating
    persisted messages and chat data.

    Use this for database schema migration, conversion functions, and data
    migration phase questions. The guide is split at its Phase and Step
    headings.

    **Parameters:**
    - `query`: What to search for (e.g., "conversion functions", "dual write")
    - `limit`: Maximum number of results, 1-5 (default 3)
    - `format`: "markdown" (default) or "json"
    """,
    annotations=ToolAnnotations(readOnlyHint=True, idempotentHint=True)
)
async def search_data_guide_tool(
    query: DataGuideQuery,
    limit: ResultLimit = 3,
    format: ResponseFormat = "markdown"
) -> str:
    """
    Keyword search over the data migration guide.

    Args:
        query: Free-text query
        limit: Number of results to show
        format: "markdown" or "json"

    Returns:
        Top matching sections or a no-results message with suggestions
    """
    try:
        return await search_documentation(
            corpus="data-guide",
            query=query,
            limit=limit,
            response_format=format
        )
    except Exception as e:
        error_msg = format_error(e, "searching the data migration guide")
        logger.error(error_msg)
        return error_msg



# ============================================================================
# Resources
# ============================================================================

@app.resource(
    "guide://migration",
    name="migration-guide",
    description="Full text of the AI SDK 5 code migration guide",
    mime_type="text/markdown"
)
def migration_guide_resource() -> str:
    return get_full_guide()


@app.resource(
    "guide://data-migration",
    name="data-migration-guide",
    description="Full text of the AI SDK 5 data migration guide",
    mime_type="text/markdown"
)
def data_migration_guide_resource() -> str:
    return get_full_data_guide()


# ============================================================================
# HTTP Routes (streamable-http transport)
# ============================================================================

@app.custom_route("/api/checklist", methods=["GET"])
async def checklist_route(request: Request) -> Response:
    """Serve the rendered migration checklist as markdown."""
    return PlainTextResponse(
        generate_checklist(),
        media_type="text/markdown; charset=utf-8",
        headers={"Cache-Control": "no-cache"}
    )


@app.custom_route("/api/conversion-functions", methods=["GET"])
async def conversion_functions_route(request: Request) -> Response:
    """Serve the v4 <-> v5 conversion functions as a TypeScript download."""
    return PlainTextResponse(
        load_conversion_functions(),
        media_type="text/plain; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{CONVERSION_FUNCTIONS_FILENAME}"',
            "Cache-Control": "public, max-age=3600"
        }
    )


# ============================================================================
# Server Entry Point
# ============================================================================

async def main():
    """Run the MCP server using the configured transport."""
    logger.info("Starting AI SDK 5 Migration MCP Server (%s)", TRANSPORT)

    if TRANSPORT == "streamable-http":
        await app.run_streamable_http_async()
    else:
        await app.run_stdio_async()


if __name__ == "__main__":
    import asyncio
    asyncio.run(main())
