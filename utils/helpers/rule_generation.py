import json
import requests
from typing import List, Optional, Sequence, Tuple
from core.mapping import clamp_confidence
from core.rules import parse_rule, validate_rule
from exceptions.custom_errors import CollaboratorUnavailableError, InvalidRuleError
from schemas.ai.services import (
    NaturalLanguageRuleRequest,
    NaturalLanguageRuleResponse,
    RuleRequestContext,
)
from schemas.entities.tables import Entities
from schemas.rules.models import Rule
from utils.json_extract import extract_json
from utils.logger import logger
from utils.helpers.collaborator import post_to_collaborator

RULE_GENERATION_URL_ENV = "RULE_GENERATION_URL"


def _failure(error: str, reasoning: str) -> NaturalLanguageRuleResponse:
    return NaturalLanguageRuleResponse(
        success=False, error=error, reasoning=reasoning, confidence=0.0
    )


def parse_rule_response(text: str) -> NaturalLanguageRuleResponse:
    """Recover a rule-generation response from a raw service body."""
    payload = extract_json(text, dict)
    if payload is None:
        logger.warning("Rule generation response contained no JSON object")
        return _failure(
            "No valid JSON found in AI response", "AI response format was unexpected"
        )
    if not isinstance(payload.get("success"), bool):
        return _failure(
            "Invalid response structure from AI", "AI response missing required fields"
        )

    rule = None
    issues = payload.get("validationIssues")
    success = payload["success"]
    error = payload.get("error")
    if error is not None and not isinstance(error, str):
        error = json.dumps(error) if isinstance(error, (dict, list)) else str(error)
    if payload.get("rule") is not None:
        try:
            rule = parse_rule(payload["rule"])
        except InvalidRuleError as e:
            logger.warning("Generated rule rejected at parse: %s", e.issues)
            success = False
            error = str(e)
            issues = e.issues

    return NaturalLanguageRuleResponse(
        success=success,
        rule=rule,
        error=error,
        reasoning=str(payload.get("reasoning") or ""),
        confidence=clamp_confidence(payload.get("confidence")),
        validationIssues=[str(i) for i in issues] if isinstance(issues, list) else None,
    )


def request_rule(
    request: str,
    entities: Entities,
    existing_rules: Optional[Sequence[Rule]] = None,
) -> NaturalLanguageRuleResponse:
    """Send a free-text rule request to the generation service. Never raises."""
    body = NaturalLanguageRuleRequest(
        request=request,
        entities=entities,
        context=RuleRequestContext(existingRules=list(existing_rules or [])),
    )
    try:
        text = post_to_collaborator(
            RULE_GENERATION_URL_ENV, body.model_dump(mode="json", exclude_none=True)
        )
    except (CollaboratorUnavailableError, requests.RequestException) as e:
        logger.warning("Rule generation unavailable: %s", e)
        return _failure(
            "Failed to process natural language request", f"API error occurred: {e}"
        )
    return parse_rule_response(text)


def accept_generated_rule(
    response: NaturalLanguageRuleResponse, entities: Entities
) -> Tuple[Optional[Rule], List[str]]:
    """
    Decide whether a generated rule may join the rule set.

    The service's own ``validationIssues`` are advisory only; the rule is re-checked
    with the core validator. Returns the rule and no errors when accepted, otherwise
    None and the reasons.
    """
    if not response.success or response.rule is None:
        return None, [response.error or "No rule was generated"]

    validation = validate_rule(response.rule, entities)
    if not validation.isValid:
        return None, validation.errors
    return response.rule, []
