"""Google Workspace tools: Docs, Sheets and Drive.

Tools (5):
- read_google_doc: Plain text of a Google Doc
- read_spreadsheet: Values of an A1 range as JSON
- search_drive: Drive files matching a query
- create_google_doc: New document with a title and body text
- list_drive_files: Names and IDs of recent Drive files

Tool and argument names follow the camelCase convention existing clients
already send (documentId, spreadsheetId, ...).
"""

import json
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from workspace_bridge.clients import DocsClient, DriveClient, SheetsClient
from workspace_bridge.errors import PartialFailureError
from workspace_bridge.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

NO_FILES_MESSAGE = "No files found."

# Drive API query operators; queries without them are treated as bare terms
DRIVE_QUERY_OPERATORS = ["contains", "=", "!=", "<", ">", " in ", " has "]

# Boolean terms that are complete queries on their own (e.g. "starred and not trashed")
DRIVE_QUERY_PREDICATES = {"sharedwithme", "trashed", "starred"}
DRIVE_QUERY_CONNECTIVES = {"and", "or", "not"}


# =============================================================================
# Argument Models
# =============================================================================


class _ToolArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ReadDocumentArgs(_ToolArgs):
    document_id: str = Field(
        alias="documentId", description="The ID of the Google Doc (found in the URL)"
    )


class ReadSpreadsheetArgs(_ToolArgs):
    spreadsheet_id: str = Field(alias="spreadsheetId", description="The Spreadsheet ID")
    range: str = Field(description="A1 notation range (e.g., 'Sheet1!A1:B10')")


class SearchDriveArgs(_ToolArgs):
    query: str = Field(
        description="Search query, e.g., 'name contains \"Budget\"'. Bare terms are "
        "searched in file contents."
    )
    max_results: int = Field(
        default=10,
        ge=1,
        le=1000,
        alias="maxResults",
        description="Maximum number of files to return (default: 10)",
    )


class CreateDocumentArgs(_ToolArgs):
    title: str = Field(description="Title of the new document")
    content: str = Field(default="", description="Body text to write into the document")


class ListFilesArgs(_ToolArgs):
    max_results: int = Field(
        default=10,
        ge=1,
        le=1000,
        alias="maxResults",
        description="Maximum number of files to return (default: 10)",
    )


# =============================================================================
# Response Shaping
# =============================================================================


def extract_document_text(content: list[dict[str, Any]]) -> str:
    """Concatenate the text runs of a Docs body in document order.

    Args:
        content: The ``body.content`` list of a Docs API document.

    Returns:
        Plain text content, including text inside table cells.
    """
    text_parts = []
    for element in content:
        if "paragraph" in element:
            for para_element in element["paragraph"].get("elements", []):
                if "textRun" in para_element:
                    text_parts.append(para_element["textRun"].get("content", ""))
        elif "table" in element:
            for row in element["table"].get("tableRows", []):
                for cell in row.get("tableCells", []):
                    text_parts.append(extract_document_text(cell.get("content", [])))
        elif "tableOfContents" in element:
            text_parts.append(extract_document_text(element["tableOfContents"].get("content", [])))

    return "".join(text_parts)


def normalize_drive_query(query: str) -> str:
    """Wrap a bare search term in ``fullText contains``.

    Args:
        query: Raw search query from the client.

    Returns:
        Drive API query; queries already using operators or only boolean
        terms such as ``starred and not trashed`` are unchanged.
    """
    query_lower = query.lower()
    if any(op in query_lower for op in DRIVE_QUERY_OPERATORS):
        return query

    words = query_lower.replace("(", " ").replace(")", " ").split()
    if any(w in DRIVE_QUERY_PREDICATES for w in words) and all(
        w in DRIVE_QUERY_PREDICATES or w in DRIVE_QUERY_CONNECTIVES for w in words
    ):
        return query

    escaped_query = query.replace("\\", "\\\\").replace("'", "\\'")
    return f"fullText contains '{escaped_query}'"


def format_file_list(files: list[dict[str, Any]]) -> str:
    """Render files as ``name (id)`` lines, or the no-files message."""
    if not files:
        return NO_FILES_MESSAGE
    return "\n".join(f"{f.get('name')} ({f.get('id')})" for f in files)


# =============================================================================
# Tool Handlers
# =============================================================================


class WorkspaceTools:
    """Handlers for the Google Workspace tools.

    Attributes:
        docs: Docs API client.
        sheets: Sheets API client.
        drive: Drive API client.
    """

    def __init__(self, docs: DocsClient, sheets: SheetsClient, drive: DriveClient) -> None:
        self.docs = docs
        self.sheets = sheets
        self.drive = drive

    def register(self, registry: ToolRegistry) -> None:
        """Register all Workspace tools with a registry."""
        registry.register_tool(
            "read_google_doc",
            "Read the plain text content of a Google Doc",
            ReadDocumentArgs,
            self.read_google_doc,
        )
        registry.register_tool(
            "read_spreadsheet",
            "Read cell values from a Google Spreadsheet range. Returns the rows as JSON.",
            ReadSpreadsheetArgs,
            self.read_spreadsheet,
        )
        registry.register_tool(
            "search_drive",
            "Search Google Drive files. Accepts Drive API query syntax or bare search "
            "terms. Returns id, name and mimeType of each match as JSON.",
            SearchDriveArgs,
            self.search_drive,
        )
        registry.register_tool(
            "create_google_doc",
            "Create a new Google Doc with a title and body text. Returns the new document ID.",
            CreateDocumentArgs,
            self.create_google_doc,
        )
        registry.register_tool(
            "list_drive_files",
            "List files in Google Drive with their names and IDs",
            ListFilesArgs,
            self.list_drive_files,
        )

    async def read_google_doc(self, args: ReadDocumentArgs) -> str:
        """Return the concatenated text runs of a document."""
        document = await self.docs.get_document(args.document_id)
        return extract_document_text(document.get("body", {}).get("content", []))

    async def read_spreadsheet(self, args: ReadSpreadsheetArgs) -> str:
        """Return the values grid of a range as indented JSON."""
        response = await self.sheets.get_values(args.spreadsheet_id, args.range)
        return json.dumps(response.get("values", []), indent=2)

    async def search_drive(self, args: SearchDriveArgs) -> str:
        """Return matching files as a JSON list of id/name/mimeType."""
        files = await self.drive.list_files(
            query=normalize_drive_query(args.query),
            page_size=args.max_results,
        )
        matches = [
            {"id": f.get("id"), "name": f.get("name"), "mimeType": f.get("mimeType")}
            for f in files
        ]
        return json.dumps(matches, indent=2)

    async def create_google_doc(self, args: CreateDocumentArgs) -> str:
        """Create a document, then write its body in a second call.

        The two calls are not atomic. If writing the body fails, the empty
        document is kept and PartialFailureError reports its ID.
        """
        created = await self.docs.create_document(args.title)
        document_id = created["documentId"]
        logger.info("Created document %s", document_id)

        if args.content:
            try:
                await self.docs.insert_text(document_id, args.content)
            except Exception as e:
                logger.warning("Failed to write content to document %s: %s", document_id, e)
                raise PartialFailureError(document_id, e) from e

        return (
            f"Created document '{args.title}' (ID: {document_id})\n"
            f"https://docs.google.com/document/d/{document_id}/edit"
        )

    async def list_drive_files(self, args: ListFilesArgs) -> str:
        """Return ``name (id)`` lines for up to maxResults files."""
        files = await self.drive.list_files(page_size=args.max_results, fields="files(id,name)")
        return format_file_list(files)
