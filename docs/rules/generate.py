generate_rule_description = """
Translate a plain-language request into a rule through the rule generation service.

### Request Body

- `request`: What the rule should do, e.g. "T1 and T2 must always run together"
- `entities`: Current entity tables
- `context`: (Optional)
    - `existingRules`: Rules already defined

### Response

- `response`: What the service returned (`success`, `rule`, `error`, `reasoning`, `confidence`, `validationIssues`)
- `accepted`: True only when the generated rule also passes rule validation against `entities`
- `errors`: Reasons the rule was not accepted

When the service is unreachable or its answer cannot be read, `response.success` is false; this endpoint does not fail.
"""

rule_suggestions_description = """
Ask the suggestion service which rules would fit the current data.

### Request Body

- `entities`: Current entity tables
- `existingRules`: Rules already defined

### Response

- `suggestions`: Suggestions with `id`, `type`, `title`, `confidence` (0 to 1) and `suggestedRule`; incomplete suggestions are dropped
- `totalFound`: Number of suggestions kept
- `error`: Set when the service could not be used
"""
