"""
Configuration for the create-checklist module.
"""

import os

TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")

CHECKLIST_TEMPLATE = os.path.join(TEMPLATE_DIR, "checklist.md")
CONVERSION_FUNCTIONS_FILE = os.path.join(TEMPLATE_DIR, "convert-messages.ts")

# File the agent creates in the user's project
CHECKLIST_FILENAME = "AI_SDK_5_MIGRATION.md"
CONVERSION_FUNCTIONS_FILENAME = "convert-messages.ts"

# Public URL of this server, used for download links in generated text
BASE_URL = os.getenv("MIGRATION_BASE_URL", "http://localhost:3000").rstrip("/")

CHECKLIST_ROUTE = "/api/checklist"
CONVERSION_FUNCTIONS_ROUTE = "/api/conversion-functions"
