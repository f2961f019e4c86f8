import os
from fastapi import APIRouter
from utils.constants import RULES_CONFIG_VERSION
from utils.helpers.header_mapping import HEADER_MAPPING_URL_ENV
from utils.helpers.rule_generation import RULE_GENERATION_URL_ENV
from utils.helpers.rule_suggestions import RULE_SUGGESTIONS_URL_ENV

router = APIRouter(prefix="/health", tags=["Health Check"])


@router.get("/check", summary="Health Check")
def healthcheck():
    # collaborators are optional; report which ones are configured
    return {
        "status": "ok",
        "rulesConfigVersion": RULES_CONFIG_VERSION,
        "collaborators": {
            "headerMapping": bool(os.getenv(HEADER_MAPPING_URL_ENV)),
            "ruleGeneration": bool(os.getenv(RULE_GENERATION_URL_ENV)),
            "ruleSuggestions": bool(os.getenv(RULE_SUGGESTIONS_URL_ENV)),
        },
    }
