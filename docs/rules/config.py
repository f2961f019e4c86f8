rules_config_description = """
Bundle a rule set into an exportable rules configuration.

### Request Body

List of Rule objects, in authoring order.

### Response

- `version`: Config format version
- `rules`: The rules sorted by descending `priority`; rules with equal priority keep their input order
- `metadata`
    - `createdAt`, `updatedAt`: Generation time (ISO-8601)
    - `totalRules`: Number of rules
    - `enabledRules`: Number of rules with `enabled: true`

Invalid and disabled rules are included.
"""

rule_draft_description = """
Create a draft rule of the given type, pre-filled with the defaults used by the rule authoring form.

### Request Body

- `type`: Rule type
- `name`: Rule name (Optional)
- `description`: Rule description (Optional)

### Response

The draft rule, with a generated `id`, priority 5, enabled, and fresh timestamps.
"""

rule_types_description = """
List the rule types that can be authored, with their display names and one-line descriptions.
"""
