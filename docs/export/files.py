export_csv_description = """
Export entity data as CSV.

### Path

- `entity`: `clients`, `workers`, `tasks`, or `all`

### Request Body

The entity tables. Columns with header `"unmapped"` are left out.

With `all`, every non-empty table is written into one file, each section headed by a `# <ENTITY> DATA` line.
"""

export_xlsx_description = """
Export entity data as an Excel workbook.

### Query

- `entity`: `clients`, `workers` or `tasks` to export a single table (Optional)

Without `entity`, every non-empty table is written to its own sheet. Columns with header `"unmapped"` are left out.
"""

export_rules_description = """
Export a rule set as a downloadable `rules-config.json` (see `/rules/config` for the format).
"""
