from typing import Any, Dict, Iterable, Iterator, List, Literal, Optional
from core.rules import parse_rule, validate_rule
from core.rules_config import generate_rules_config
from exceptions.custom_errors import DuplicateRuleError, RuleNotFoundError
from schemas.entities.tables import Entities
from schemas.rules.models import Rule, RulesConfig, RuleValidation, now_iso

RuleStatus = Literal["valid", "invalid"]


class RuleManager:
    """
    Owns the rule set of one editing session.

    Rules reference entity identifiers by value only, so validity is recomputed on
    demand against whatever entity tables are passed in. Enabling or disabling a
    rule never changes its validity.
    """

    def __init__(self, rules: Optional[Iterable[Rule]] = None):
        self._rules: List[Rule] = []
        for rule in rules or []:
            self.add_rule(rule)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(list(self._rules))

    @property
    def rules(self) -> List[Rule]:
        return list(self._rules)

    def _index(self, rule_id: str) -> int:
        for idx, rule in enumerate(self._rules):
            if rule.id == rule_id:
                return idx
        raise RuleNotFoundError(f"Rule {rule_id!r} not found")

    def get_rule(self, rule_id: str) -> Rule:
        return self._rules[self._index(rule_id)]

    def add_rule(self, rule: Rule) -> Rule:
        """Register a rule; ids must be unique within the set."""
        if any(existing.id == rule.id for existing in self._rules):
            raise DuplicateRuleError(f"Rule {rule.id!r} already exists")
        self._rules.append(rule)
        return rule

    def update_rule(self, rule_id: str, **changes: Any) -> Rule:
        """Apply field changes, re-parse the result and bump ``updatedAt``."""
        idx = self._index(rule_id)
        payload = self._rules[idx].model_dump()
        payload.update(changes)
        payload["id"] = rule_id
        payload["updatedAt"] = now_iso()
        updated = parse_rule(payload)
        self._rules[idx] = updated
        return updated

    def delete_rule(self, rule_id: str) -> Rule:
        return self._rules.pop(self._index(rule_id))

    def set_enabled(self, rule_id: str, enabled: bool) -> Rule:
        return self.update_rule(rule_id, enabled=enabled)

    def toggle_rule(self, rule_id: str) -> Rule:
        return self.set_enabled(rule_id, not self.get_rule(rule_id).enabled)

    def validate(self, rule_id: str, entities: Entities) -> RuleValidation:
        return validate_rule(self.get_rule(rule_id), entities)

    def validate_all(self, entities: Entities) -> Dict[str, RuleValidation]:
        return {rule.id: validate_rule(rule, entities) for rule in self._rules}

    def status(self, rule_id: str, entities: Entities) -> RuleStatus:
        return "valid" if self.validate(rule_id, entities).isValid else "invalid"

    def generate_config(self) -> RulesConfig:
        return generate_rules_config(self._rules)
