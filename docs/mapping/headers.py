map_headers_description = """
Identify which entity a spreadsheet section holds and how its columns line up with the canonical fields.

### Request Body

- `headers`: Raw header row of the section
- `sampleRows`: A few data rows to help classification (Optional; only the first 3 are sent)

### Response

- `entity`: `clients`, `workers`, `tasks`, or null when the section could not be classified
- `mappedHeaders`: One entry per raw header: the canonical field it feeds, or `"null"`
- `confidence`: 0 to 1
- `reasoning`: Explanation from the service, or the reason for falling back

If the mapping service is unavailable the raw headers come back unchanged with `entity: null` and confidence 0.
"""

apply_mapping_description = """
Rebuild a section's rows so column `i` holds canonical field `i` of the mapped entity.

### Request Body

- `headers`: Raw header row
- `rows`: Raw data rows
- `mapping`: Mapping result from `/mapping/headers` (possibly edited by the user)

### Response

- `imported`: False when the mapping has no entity; the section is then left for manual handling
- `entity`: The entity the table belongs to
- `table`: The aligned `EntityTable`; canonical fields no column feeds get header `"unmapped"` and empty cells
"""

load_sections_description = """
Split an uploaded spreadsheet into header + rows sections.

### Request

- Body: the raw file bytes
- Query `filename`: Original file name; its extension (`.csv` or `.xlsx`) selects the parser

CSV sections are separated by fully blank rows and need a header plus at least one data row. XLSX files give one section per sheet.

### Response

List of sections with `name`, `headers` and `rows`.
"""
