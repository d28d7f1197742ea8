"""
Instruction text returned by the create-checklist tool.
"""


def format_create_instructions(api_url: str, checklist_path: str) -> str:
    """
    Build the step-by-step instructions for creating the checklist file.

    Args:
        api_url: URL serving the rendered checklist
        checklist_path: File to create in the user's project

    Returns:
        Markdown instructions for the agent
    """
    return f"""ACTION REQUIRED: Fetch and create the migration checklist file.

FILE PATH: {checklist_path}

STEP 1 - CHECK IF FILE EXISTS:
1. Use read_file to check if {checklist_path} exists
2. If it EXISTS: Ask the user if they want to overwrite (they may have progress saved)
3. If it DOES NOT EXIST or user approves: Proceed to Step 2

STEP 2 - FETCH THE CHECKLIST:
Run this command to download the checklist:

```bash
curl -s "{api_url}" -o "{checklist_path}"
```

STEP 3 - VERIFY THE FILE WAS CREATED:
After running the curl command, read the file to confirm it was created successfully.

---

HOW TO USE THE CHECKLIST:

1. **Work through phases in order** (Phase 1 -> Phase 2 -> Phase 3, etc.)
2. **Check off items as you complete them**:
   - Change `- [ ]` to `- [x]` in the checklist file
   - Update {checklist_path} after EVERY subsection
3. **Read the checklist before asking what to do next**: the next unchecked item tells you what to do
4. **After Phase 3 (codemods)**: Search for ALL "FIXME" comments and fix them in Phase 4
5. **After Phase 4**: Run a build to catch type errors across all files
6. **Use the right search tool**:
   - `search-guide` for code migration questions (APIs, imports, etc.)
   - `search-data-guide` for database/persistence questions (conversion functions, schema changes)

WORKFLOW:
Read checklist -> Find next `- [ ]` -> Complete task -> UPDATE CHECKLIST (`- [x]`) -> Repeat
"""
