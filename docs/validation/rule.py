validate_rule_description = """
Check one rule against the current entity tables.

### Request Body

- `rule`: Rule object; `type` must be one of `coRun`, `slotRestriction`, `loadLimit`, `phaseWindow`, `patternMatch`, `precedenceOverride`
- `entities`: The entity tables the rule refers to

### Response

- `isValid`: True when no errors were found
- `errors`: Every problem found; checks do not stop at the first failure

A payload that does not match any rule type is reported as `isValid: false` with the parse issues as errors.
"""

validate_rules_description = """
Check a whole rule set against the current entity tables.

### Request Body

- `rules`: List of Rule objects
- `entities`: The entity tables the rules refer to

### Response

Map of rule id to `{isValid, errors}`. Enabled and disabled rules are checked alike.
"""
