validate_entities_description = """
Validate the three entity tables in one pass: every row against its entity's field schema, then cross-entity references.

### Request Body

- `clients`, `workers`, `tasks`: `EntityTable` objects (each optional, defaults to an empty table)
    - `headers`: Canonical field names in canonical order; `"unmapped"` marks a field with no data
    - `data`: List of rows, each a list of cell values aligned with `headers`
    - `mappingInfo`: Result of header mapping for this table (Optional)

### Response

Per-entity error maps keyed `"row-col"` (0-based). A cross-entity message replaces a field message at the same cell.

- Field errors, e.g. `"PriorityLevel must be between 1 and 5"`
- Relationship errors, e.g. `"Requested tasks not found: T9"`, `"Required skills not available: welding"`

An empty map for every entity means the data is valid.
"""
