"""
Create Checklist - AI SDK 5 migration checklist rendering.

Renders the bundled checklist template with this server's download links
and builds the instructions the create-checklist tool hands to the agent.
"""

from datetime import date
from string import Template
from typing import Optional

from .formatters import format_create_instructions
from .models import (
    BASE_URL,
    CHECKLIST_FILENAME,
    CHECKLIST_ROUTE,
    CHECKLIST_TEMPLATE,
    CONVERSION_FUNCTIONS_FILE,
    CONVERSION_FUNCTIONS_FILENAME,
    CONVERSION_FUNCTIONS_ROUTE,
)

__all__ = [
    'generate_checklist',
    'create_checklist_instructions',
    'load_conversion_functions',
    'format_create_instructions',
    'CHECKLIST_FILENAME',
    'CONVERSION_FUNCTIONS_FILENAME',
]


def _read_asset(path: str) -> str:
    with open(path, "r", encoding="utf-8") as handle:
        return handle.read()


def generate_checklist(base_url: Optional[str] = None) -> str:
    """
    Render the migration checklist markdown.

    Args:
        base_url: Public URL of this server. Falls back to MIGRATION_BASE_URL.

    Returns:
        Checklist markdown with the conversion-functions link and the
        current date filled in
    """
    base = (base_url or BASE_URL).rstrip("/")
    template = Template(_read_asset(CHECKLIST_TEMPLATE))
    return template.substitute(
        conversion_functions_url=f"{base}{CONVERSION_FUNCTIONS_ROUTE}",
        last_updated=date.today().isoformat(),
    )


def create_checklist_instructions(base_url: Optional[str] = None) -> str:
    """Instructions telling the agent how to download and use the checklist."""
    base = (base_url or BASE_URL).rstrip("/")
    return format_create_instructions(f"{base}{CHECKLIST_ROUTE}", CHECKLIST_FILENAME)


def load_conversion_functions() -> str:
    """Return the bundled TypeScript v4 <-> v5 message conversion helpers."""
    return _read_asset(CONVERSION_FUNCTIONS_FILE)
