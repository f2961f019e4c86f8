import requests
from pydantic import ValidationError
from typing import Any, List, Optional, Sequence
from core.mapping import clamp_confidence
from exceptions.custom_errors import CollaboratorUnavailableError
from schemas.ai.services import (
    RuleSuggestion,
    RuleSuggestionsRequest,
    RuleSuggestionsResponse,
)
from schemas.entities.tables import Entities
from schemas.rules.models import Rule
from utils.json_extract import extract_json
from utils.logger import logger
from utils.helpers.collaborator import post_to_collaborator

RULE_SUGGESTIONS_URL_ENV = "RULE_SUGGESTIONS_URL"
REQUIRED_SUGGESTION_KEYS = ("id", "type", "title", "confidence", "suggestedRule")


def _clean_suggestion(item: Any) -> Optional[RuleSuggestion]:
    """Drop suggestions missing a required key; clamp confidence into [0, 1]."""
    if not isinstance(item, dict):
        return None
    if any(item.get(key) in (None, "") for key in REQUIRED_SUGGESTION_KEYS):
        return None
    item = dict(item)
    item["confidence"] = clamp_confidence(item["confidence"])
    try:
        return RuleSuggestion.model_validate(item)
    except ValidationError:
        return None


def parse_suggestions_response(text: str) -> RuleSuggestionsResponse:
    payload = extract_json(text, list)
    if payload is None:
        # some deployments wrap the list as {"suggestions": [...]}
        wrapped = extract_json(text, dict)
        if wrapped is not None and isinstance(wrapped.get("suggestions"), list):
            payload = wrapped["suggestions"]
    if payload is None:
        logger.warning("Rule suggestions response contained no JSON array")
        return RuleSuggestionsResponse(error="No valid JSON array found in AI response")

    suggestions: List[RuleSuggestion] = []
    for item in payload:
        suggestion = _clean_suggestion(item)
        if suggestion is not None:
            suggestions.append(suggestion)
    if len(suggestions) < len(payload):
        logger.info("Dropped %d malformed suggestions", len(payload) - len(suggestions))
    return RuleSuggestionsResponse(suggestions=suggestions, totalFound=len(suggestions))


def get_rule_suggestions(
    entities: Entities, existing_rules: Sequence[Rule] = ()
) -> RuleSuggestionsResponse:
    """Ask the suggestion service for rules worth adding. Never raises."""
    body = RuleSuggestionsRequest(entities=entities, existingRules=list(existing_rules))
    try:
        text = post_to_collaborator(
            RULE_SUGGESTIONS_URL_ENV, body.model_dump(mode="json", exclude_none=True)
        )
    except (CollaboratorUnavailableError, requests.RequestException) as e:
        logger.warning("Rule suggestions unavailable: %s", e)
        return RuleSuggestionsResponse(error="Failed to generate rule suggestions")
    return parse_suggestions_response(text)
