import pytest
from core.state import CellChange, EditingSession
from exceptions.custom_errors import UnknownEntityError


@pytest.fixture
def session(entities):
    s = EditingSession()
    s.load_table("clients", entities.clients)
    return s


def test_fresh_session_has_no_changes(session):
    assert not session.has_any_changes()
    assert session.changes_summary() == {"clients": 0, "workers": 0, "tasks": 0, "total": 0}


def test_edit_marks_cell_and_keeps_original(session):
    session.update_cell("clients", 0, 2, "5")
    assert session.get_table("clients").data[0][2] == "5"
    assert session.original["clients"].data[0][2] == "3"
    assert session.get_modified_cells("clients") == ["0-2"]
    assert session.diff("clients") == [CellChange(0, 2, "3", "5")]


def test_edit_back_to_original_clears_mark(session):
    session.update_cell("clients", 0, 2, "5")
    session.update_cell("clients", 0, 2, "3")
    assert not session.has_changes("clients")


def test_edit_grows_table(session):
    session.update_cell("clients", 4, 1, "New")
    rows = session.get_table("clients").data
    assert len(rows) == 5
    assert rows[4] == [None, "New"]
    assert session.get_modified_cells("clients") == ["4-1"]


def test_reset(session):
    session.update_cell("clients", 0, 0, "X")
    session.update_cell("tasks", 0, 0, "T9")
    session.reset_entity("clients")
    assert session.get_table("clients").data[0][0] == "C1"
    assert session.changes_summary()["total"] == 1
    session.reset_all()
    assert not session.has_any_changes()
    assert session.get_table("tasks").data == []


def test_snapshot_is_detached(session):
    snapshot = session.entities()
    session.update_cell("clients", 0, 0, "X")
    assert snapshot.clients.data[0][0] == "C1"


def test_unknown_entity(session):
    with pytest.raises(UnknownEntityError):
        session.update_cell("vendors", 0, 0, "x")


@pytest.mark.parametrize("row_idx, col_idx", [(-1, 0), (0, -1)])
def test_negative_position_rejected(session, row_idx, col_idx):
    before = [list(row) for row in session.get_table("clients").data]
    with pytest.raises(IndexError):
        session.update_cell("clients", row_idx, col_idx, "X")
    assert session.get_table("clients").data == before
    assert not session.has_changes("clients")
