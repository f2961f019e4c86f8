from dataclasses import dataclass, field
from copy import deepcopy
from typing import Any, Dict, List, Set, Tuple
from schemas.entities.tables import Entities, EntityTable
from utils.constants import ENTITY_TYPES
from exceptions.custom_errors import UnknownEntityError


def _empty_tables() -> Dict[str, EntityTable]:
    return {entity: EntityTable() for entity in ENTITY_TYPES}


@dataclass
class CellChange:
    row: int
    col: int
    original: Any
    current: Any


@dataclass
class EditingSession:
    """
    A dataclass to hold the editable state of one session's entity tables.

    The session is passed explicitly to whoever edits or validates data; there is no
    process-wide store.
    """

    original: Dict[str, EntityTable] = field(default_factory=_empty_tables)
    """Snapshot of each entity table as it was last loaded."""
    working: Dict[str, EntityTable] = field(default_factory=_empty_tables)
    """Working copy of each entity table, receiving the user's edits."""
    modified_cells: Dict[str, Set[Tuple[int, int]]] = field(
        default_factory=lambda: {entity: set() for entity in ENTITY_TYPES}
    )
    """``(row, col)`` positions whose working value differs from the original."""

    def _check(self, entity: str) -> None:
        if entity not in ENTITY_TYPES:
            raise UnknownEntityError(f"Unknown entity type: {entity!r}")

    def load_table(self, entity: str, table: EntityTable) -> None:
        """Replace an entity wholesale, e.g. after an import and mapping pass."""
        self._check(entity)
        self.original[entity] = table.model_copy(deep=True)
        self.working[entity] = table.model_copy(deep=True)
        self.modified_cells[entity] = set()

    def update_cell(self, entity: str, row_idx: int, col_idx: int, value: Any) -> None:
        """
        Write one cell of the working copy.

        Rows and columns are grown as needed. A cell edited back to its original
        value stops counting as modified.
        """
        self._check(entity)
        if row_idx < 0 or col_idx < 0:
            raise IndexError(f"Cell position must be non-negative, got ({row_idx}, {col_idx})")
        rows = self.working[entity].data
        while len(rows) <= row_idx:
            rows.append([])
        row = rows[row_idx]
        while len(row) <= col_idx:
            row.append(None)
        row[col_idx] = value

        if value != self._original_value(entity, row_idx, col_idx):
            self.modified_cells[entity].add((row_idx, col_idx))
        else:
            self.modified_cells[entity].discard((row_idx, col_idx))

    def _original_value(self, entity: str, row_idx: int, col_idx: int) -> Any:
        rows = self.original[entity].data
        if row_idx < len(rows) and col_idx < len(rows[row_idx]):
            return rows[row_idx][col_idx]
        return None

    def reset_entity(self, entity: str) -> None:
        self._check(entity)
        self.working[entity] = self.original[entity].model_copy(deep=True)
        self.modified_cells[entity] = set()

    def reset_all(self) -> None:
        for entity in ENTITY_TYPES:
            self.reset_entity(entity)

    def get_table(self, entity: str) -> EntityTable:
        self._check(entity)
        return self.working[entity]

    def has_changes(self, entity: str) -> bool:
        self._check(entity)
        return bool(self.modified_cells[entity])

    def has_any_changes(self) -> bool:
        return any(self.modified_cells[entity] for entity in ENTITY_TYPES)

    def get_modified_cells(self, entity: str) -> List[str]:
        """Modified positions as ``"row-col"`` keys, in row/column order."""
        self._check(entity)
        return [f"{r}-{c}" for r, c in sorted(self.modified_cells[entity])]

    def diff(self, entity: str) -> List[CellChange]:
        self._check(entity)
        return [
            CellChange(r, c, self._original_value(entity, r, c), self.working[entity].data[r][c])
            for r, c in sorted(self.modified_cells[entity])
        ]

    def changes_summary(self) -> Dict[str, int]:
        summary = {entity: len(self.modified_cells[entity]) for entity in ENTITY_TYPES}
        summary["total"] = sum(summary.values())
        return summary

    def entities(self) -> Entities:
        """A consistent deep-copied snapshot of the working tables for one validation pass."""
        return Entities(**deepcopy(self.working))
