"""
core
----

Validation and rule engine for client/worker/task spreadsheets:

- constraints / field_validators:
  Cell helpers and the per-field checks shared by the row schemas.

- row_validation / relationships / validation:
  Row schema checks, cross-entity reference checks, and the merged validation cycle.

- rules / rule_manager / rules_config:
  Rule checks per rule type, the per-session rule set, and the exported rules config.

- mapping / state:
  Applying header-mapping results, and the editing session that tracks cell changes.
"""
