from typing import Dict, Set
from core.constraints import cell_text, split_list
from schemas.entities.tables import Entities, EntityTable


def relationship_key(entity: str, row_idx: int, col_idx: int) -> str:
    return f"{entity}-{row_idx}-{col_idx}"


def collect_task_ids(tasks: EntityTable) -> Set[str]:
    """All non-empty TaskIDs in the tasks table, trimmed."""
    return {cell_text(v) for v in tasks.column_values("TaskID") if cell_text(v)}


def collect_worker_skills(workers: EntityTable) -> Set[str]:
    """Every skill offered by any worker, case-folded."""
    skills = set()
    for value in workers.column_values("Skills"):
        skills.update(skill.casefold() for skill in split_list(value))
    return skills


def validate_client_task_references(
    clients: EntityTable, task_ids: Set[str]
) -> Dict[str, str]:
    """Report RequestedTaskIDs entries that are not in the tasks table."""
    errors: Dict[str, str] = {}
    col_idx = clients.column_index("RequestedTaskIDs")
    if col_idx == -1 or not task_ids:
        return errors

    for row_idx, value in enumerate(clients.column_values("RequestedTaskIDs")):
        missing = [t for t in split_list(value) if t not in task_ids]
        if missing:
            errors[relationship_key("clients", row_idx, col_idx)] = (
                f"Requested tasks not found: {', '.join(missing)}"
            )
    return errors


def validate_task_skill_coverage(
    tasks: EntityTable, worker_skills: Set[str]
) -> Dict[str, str]:
    """Report RequiredSkills no worker can provide."""
    errors: Dict[str, str] = {}
    col_idx = tasks.column_index("RequiredSkills")
    if col_idx == -1 or not worker_skills:
        return errors

    for row_idx, value in enumerate(tasks.column_values("RequiredSkills")):
        missing = [s for s in split_list(value) if s.casefold() not in worker_skills]
        if missing:
            errors[relationship_key("tasks", row_idx, col_idx)] = (
                f"Required skills not available: {', '.join(missing)}"
            )
    return errors


def validate_relationships(entities: Entities) -> Dict[str, str]:
    """
    Cross-check the three entity tables.

    Two checks run, each disabled when its source data is missing (header not mapped,
    table empty):
      - every client RequestedTaskIDs entry must exist as a TaskID
      - every task RequiredSkills entry must be offered by at least one worker

    Returns a flat map keyed ``"entity-row-col"``. Inputs are not modified.
    """
    errors: Dict[str, str] = {}
    errors.update(
        validate_client_task_references(
            entities.clients, collect_task_ids(entities.tasks)
        )
    )
    errors.update(
        validate_task_skill_coverage(
            entities.tasks, collect_worker_skills(entities.workers)
        )
    )
    return errors
