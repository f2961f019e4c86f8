"""
Canonical row schemas for clients, workers and tasks.

Field order matches the expected header order of each entity. Every field runs
through ``_cell``, which enforces required-ness, delegates bounds and list syntax to
the single-cell validators, and coerces the raw cell into its typed value.
"""

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic_core import PydanticCustomError
from typing import Annotated, Any, Dict, List, Optional, Type
from core.constraints import cell_text, is_empty, parse_positive_int_list, to_number
from core.field_validators import validate_cell


def _cell(field: str, required: bool = True, kind: str = "text"):
    def check(value: Any) -> Any:
        if is_empty(value):
            if required:
                raise PydanticCustomError(
                    "required", "{field} is required", {"field": field}
                )
            return None

        message = validate_cell(field, value)
        if message:
            raise PydanticCustomError("constraint", "{message}", {"message": message})

        if kind == "text":
            return cell_text(value)
        if kind == "number":
            return to_number(value)
        if kind == "int":
            num = to_number(value)
            if not num.is_integer():
                raise PydanticCustomError(
                    "integer", "{field} must be an integer", {"field": field}
                )
            return int(num)
        if kind == "slots":
            return parse_positive_int_list(value)
        if kind == "phases":
            return parse_positive_int_list(value, allow_range=True)
        return value

    return BeforeValidator(check)


class ClientRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ClientID: Annotated[str, _cell("ClientID")]
    ClientName: Annotated[str, _cell("ClientName")]
    PriorityLevel: Annotated[int, _cell("PriorityLevel", kind="int")]
    RequestedTaskIDs: Annotated[str, _cell("RequestedTaskIDs")]
    GroupTag: Annotated[Optional[str], _cell("GroupTag", required=False)] = None
    AttributesJSON: Annotated[
        Optional[str], _cell("AttributesJSON", required=False)
    ] = None


class WorkerRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    WorkerID: Annotated[str, _cell("WorkerID")]
    WorkerName: Annotated[str, _cell("WorkerName")]
    Skills: Annotated[str, _cell("Skills")]
    AvailableSlots: Annotated[List[int], _cell("AvailableSlots", kind="slots")]
    MaxLoadPerPhase: Annotated[int, _cell("MaxLoadPerPhase", kind="int")]
    WorkerGroup: Annotated[Optional[str], _cell("WorkerGroup", required=False)] = None
    QualificationLevel: Annotated[
        Optional[int], _cell("QualificationLevel", required=False, kind="int")
    ] = None


class TaskRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    TaskID: Annotated[str, _cell("TaskID")]
    TaskName: Annotated[str, _cell("TaskName")]
    Category: Annotated[str, _cell("Category")]
    Duration: Annotated[float, _cell("Duration", kind="number")]
    RequiredSkills: Annotated[str, _cell("RequiredSkills")]
    PreferredPhases: Annotated[List[int], _cell("PreferredPhases", kind="phases")]
    MaxConcurrent: Annotated[int, _cell("MaxConcurrent", kind="int")]


ENTITY_SCHEMAS: Dict[str, Type[BaseModel]] = {
    "clients": ClientRow,
    "workers": WorkerRow,
    "tasks": TaskRow,
}
