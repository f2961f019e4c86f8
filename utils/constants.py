"""
Loads configuration constants from config/constants.json and exposes them as module-level variables.
Edit constants.json to change values; import from utils.constants to use in code.
"""

import json
from config.paths import CONSTANTS_PATH

with open(CONSTANTS_PATH, "r", encoding="utf-8") as f:
    _constants = json.load(f)

# Entities and their canonical (expected) headers, in column order
ENTITY_TYPES = tuple(_constants["ENTITY_TYPES"])
EXPECTED_HEADERS = {
    entity: list(headers) for entity, headers in _constants["EXPECTED_HEADERS"].items()
}
UNMAPPED_HEADER = _constants["UNMAPPED_HEADER"]
UNMAPPED_MARKERS = frozenset(_constants["UNMAPPED_MARKERS"])

# Field bounds
PRIORITY_LEVEL_RANGE = tuple(_constants["PRIORITY_LEVEL_RANGE"])
QUALIFICATION_LEVEL_RANGE = tuple(_constants["QUALIFICATION_LEVEL_RANGE"])

# Business rules
RULES_CONFIG_VERSION = _constants["RULES_CONFIG_VERSION"]
MIN_RULE_PRIORITY = _constants["MIN_RULE_PRIORITY"]
MAX_RULE_PRIORITY = _constants["MAX_RULE_PRIORITY"]
DEFAULT_RULE_PRIORITY = _constants["DEFAULT_RULE_PRIORITY"]

# External services
MAPPING_SAMPLE_ROWS = _constants["MAPPING_SAMPLE_ROWS"]
COLLABORATOR_TIMEOUT = _constants["COLLABORATOR_TIMEOUT"]
