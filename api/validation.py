from typing import Dict
from fastapi import APIRouter, HTTPException
from core.rules import parse_rule, validate_rule
from core.validation import validate_entities
from docs.validation.entities import validate_entities_description
from docs.validation.rule import validate_rule_description, validate_rules_description
from exceptions.custom_errors import *
from schemas.entities.tables import Entities, ValidationErrors
from schemas.rules.models import RuleValidation
from schemas.rules.requests import RuleValidationRequest, RulesValidationRequest

router = APIRouter(prefix="/validate", tags=["Validation"])


@router.post(
    "/entities",
    response_model=ValidationErrors,
    description=validate_entities_description,
    summary="Validate Entity Tables",
)
def validate_entity_tables(entities: Entities):
    try:
        return validate_entities(entities)
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))


@router.post(
    "/rule",
    response_model=RuleValidation,
    description=validate_rule_description,
    summary="Validate Rule",
)
def validate_single_rule(data: RuleValidationRequest):
    try:
        rule = parse_rule(data.rule)
    except InvalidRuleError as e:
        return RuleValidation(isValid=False, errors=e.issues or [str(e)])
    return validate_rule(rule, data.entities)


@router.post(
    "/rules",
    response_model=Dict[str, RuleValidation],
    description=validate_rules_description,
    summary="Validate Rule Set",
)
def validate_rule_set(data: RulesValidationRequest):
    return {rule.id: validate_rule(rule, data.entities) for rule in data.rules}
