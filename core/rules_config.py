import json
from utils.logger import get_logger
from typing import Sequence
from schemas.rules.models import (
    Rule,
    RulesConfig,
    RulesConfigMetadata,
    now_iso,
)
from utils.constants import RULES_CONFIG_VERSION

logger = get_logger(__name__)


def generate_rules_config(rules: Sequence[Rule]) -> RulesConfig:
    """
    Snapshot a rule set as an exportable config.

    Rules are ordered by descending priority; ties keep their input order. Invalid
    and disabled rules are exported too, so a broken rule can be inspected and fixed
    from the file rather than silently dropped. The input sequence is not modified.
    """
    now = now_iso()
    ordered = sorted(rules, key=lambda rule: -rule.priority)
    enabled_rules = sum(1 for rule in ordered if rule.enabled)

    logger.info(
        "Generated rules config: %d rules (%d enabled)", len(ordered), enabled_rules
    )
    return RulesConfig(
        version=RULES_CONFIG_VERSION,
        rules=[rule.model_copy(deep=True) for rule in ordered],
        metadata=RulesConfigMetadata(
            createdAt=now,
            updatedAt=now,
            totalRules=len(ordered),
            enabledRules=enabled_rules,
        ),
    )


def rules_config_to_dict(config: RulesConfig) -> dict:
    """Plain JSON-ready dict; optional rule fields that were never set are omitted."""
    return config.model_dump(mode="json", exclude_none=True)


def dump_rules_config(config: RulesConfig, indent: int = 2) -> str:
    return json.dumps(rules_config_to_dict(config), indent=indent, ensure_ascii=False)


def load_rules_config(text: str) -> RulesConfig:
    return RulesConfig.model_validate_json(text)
