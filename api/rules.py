from typing import List
from fastapi import APIRouter, HTTPException
from core.rule_manager import RuleManager
from core.rules import (
    RULE_DISPLAY_NAMES,
    create_base_rule,
    get_rule_type_description,
    get_rule_type_display_name,
)
from docs.rules.config import (
    rule_draft_description,
    rule_types_description,
    rules_config_description,
)
from docs.rules.generate import generate_rule_description, rule_suggestions_description
from exceptions.custom_errors import *
from schemas.ai.services import (
    NaturalLanguageRuleRequest,
    RuleGenerationResult,
    RuleSuggestionsRequest,
    RuleSuggestionsResponse,
)
from schemas.rules.models import Rule, RulesConfig
from schemas.rules.requests import RuleDraftRequest
from utils.helpers.rule_generation import accept_generated_rule, request_rule
from utils.helpers.rule_suggestions import get_rule_suggestions

router = APIRouter(prefix="/rules", tags=["Rules"])


@router.get(
    "/types",
    description=rule_types_description,
    summary="List Rule Types",
)
def list_rule_types():
    return [
        {
            "type": rule_type,
            "displayName": get_rule_type_display_name(rule_type),
            "description": get_rule_type_description(rule_type),
        }
        for rule_type in RULE_DISPLAY_NAMES
    ]


@router.post(
    "/config",
    response_model=RulesConfig,
    response_model_exclude_none=True,
    description=rules_config_description,
    summary="Generate Rules Config",
)
def build_rules_config(rules: List[Rule]):
    try:
        return RuleManager(rules).generate_config()
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))


@router.post(
    "/draft",
    response_model=Rule,
    response_model_exclude_none=True,
    description=rule_draft_description,
    summary="Create Draft Rule",
)
def draft_rule(data: RuleDraftRequest):
    try:
        return create_base_rule(data.type, data.name, data.description)
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))


@router.post(
    "/generate",
    response_model=RuleGenerationResult,
    response_model_exclude_none=True,
    description=generate_rule_description,
    summary="Generate Rule From Text",
)
def generate_rule(data: NaturalLanguageRuleRequest):
    existing = data.context.existingRules if data.context else []
    response = request_rule(data.request, data.entities, existing)
    rule, errors = accept_generated_rule(response, data.entities)
    return RuleGenerationResult(response=response, accepted=rule is not None, errors=errors)


@router.post(
    "/suggestions",
    response_model=RuleSuggestionsResponse,
    description=rule_suggestions_description,
    summary="Suggest Rules",
)
def suggest_rules(data: RuleSuggestionsRequest):
    return get_rule_suggestions(data.entities, data.existingRules)
