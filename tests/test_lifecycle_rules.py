from datetime import datetime
from types import SimpleNamespace

import pytest

from gearguard.domain.lifecycle import (
    apply_equipment_defaults,
    apply_schedule_transition,
    equipment_scrap_state,
    needs_scrap_cascade,
)
from gearguard.domain.worktime import is_overtime, total_logged_hours, worksheet_hours

NOW = datetime(2024, 5, 1, 12, 0)


def _equipment(team=None, tech=None):
    return SimpleNamespace(MaintenanceTeamID=team, DefaultTechnicianID=tech)


# ---- ekipman varsayılanları ----
def test_equipment_defaults_fill_team_and_technician():
    values, techs = apply_equipment_defaults({"MaintenanceFor": "equipment"}, _equipment(team=2, tech=7), None)
    assert values["MaintenanceTeamID"] == 2
    assert values["AssignedTechnicianID"] == 7
    assert techs == [7]


def test_equipment_team_overrides_client_team():
    values, _ = apply_equipment_defaults(
        {"MaintenanceFor": "equipment", "MaintenanceTeamID": 9}, _equipment(team=2), None,
    )
    assert values["MaintenanceTeamID"] == 2


def test_client_technicians_win_over_default_technician():
    values, techs = apply_equipment_defaults(
        {"MaintenanceFor": "equipment"}, _equipment(tech=7), [3, 5],
    )
    assert techs == [3, 5]
    assert "AssignedTechnicianID" not in values


def test_empty_technician_list_gets_the_default():
    _, techs = apply_equipment_defaults({"MaintenanceFor": "equipment"}, _equipment(tech=7), [])
    assert techs == [7]


def test_work_center_target_gets_no_equipment_defaults():
    values = {"MaintenanceFor": "work_center", "MaintenanceTeamID": 9}
    out, techs = apply_equipment_defaults(values, _equipment(team=2, tech=7), None)
    assert out == values
    assert techs is None


def test_equipment_without_defaults_changes_nothing():
    values = {"MaintenanceFor": "equipment", "MaintenanceTeamID": 9}
    out, techs = apply_equipment_defaults(values, _equipment(), None)
    assert out == values
    assert techs is None


# ---- takvim geçişi ----
def test_scheduling_a_new_request_moves_it_in_progress():
    assert apply_schedule_transition("new", {"ScheduledDate": NOW})["Status_s"] == "in_progress"


def test_schedule_transition_overrides_client_status():
    out = apply_schedule_transition("new", {"ScheduledDate": NOW, "Status_s": "new"})
    assert out["Status_s"] == "in_progress"


@pytest.mark.parametrize("status", ["in_progress", "repaired", "scrap"])
def test_schedule_transition_only_fires_from_new(status):
    assert "Status_s" not in apply_schedule_transition(status, {"ScheduledDate": NOW})


def test_clearing_the_schedule_does_not_transition():
    assert "Status_s" not in apply_schedule_transition("new", {"ScheduledDate": None})
    assert "Status_s" not in apply_schedule_transition("new", {"Subject": "x"})


# ---- hurda kaskadı ----
@pytest.mark.parametrize("status,equipment_id,expected", [
    ("scrap", 1, True),
    ("scrap", None, False),
    ("repaired", 1, False),
    ("new", 1, False),
])
def test_needs_scrap_cascade(status, equipment_id, expected):
    assert needs_scrap_cascade(status, equipment_id) is expected


# ---- ekipman durum / hurda tarihi ----
def test_scrap_date_drives_status():
    assert equipment_scrap_state({"ScrapDate": NOW}, None, NOW) == {"ScrapDate": NOW, "Status_s": "scrapped"}
    assert equipment_scrap_state({"ScrapDate": None}, NOW, NOW) == {"ScrapDate": None, "Status_s": "active"}


def test_scrap_date_wins_over_status_in_same_payload():
    out = equipment_scrap_state({"ScrapDate": None, "Status_s": "scrapped"}, None, NOW)
    assert out == {"ScrapDate": None, "Status_s": "active"}


def test_status_drives_scrap_date():
    earlier = datetime(2024, 1, 1)
    assert equipment_scrap_state({"Status_s": "scrapped"}, None, NOW)["ScrapDate"] == NOW
    assert equipment_scrap_state({"Status_s": "scrapped"}, earlier, NOW)["ScrapDate"] == earlier
    assert equipment_scrap_state({"Status_s": "active"}, earlier, NOW) == {"Status_s": "active", "ScrapDate": None}


def test_untouched_fields_recompute_from_current_date():
    assert equipment_scrap_state({"Name": "x"}, NOW, NOW) == {"Status_s": "scrapped", "ScrapDate": NOW}
    assert equipment_scrap_state({}, None, NOW) == {"Status_s": "active", "ScrapDate": None}


# ---- worksheet saatleri ----
def test_worksheet_hours():
    assert worksheet_hours(datetime(2024, 1, 1, 9, 0), datetime(2024, 1, 1, 11, 30)) == 2.5
    assert worksheet_hours(datetime(2024, 1, 1, 11, 0), datetime(2024, 1, 1, 9, 0)) == 0
    assert worksheet_hours(None, datetime(2024, 1, 1, 9, 0)) == 0


def test_total_and_overtime():
    entries = [
        SimpleNamespace(StartTime=datetime(2024, 1, 1, 9), EndTime=datetime(2024, 1, 1, 11, 30)),
        SimpleNamespace(StartTime=datetime(2024, 1, 1, 14), EndTime=datetime(2024, 1, 1, 13)),
        SimpleNamespace(StartTime=datetime(2024, 1, 2, 8), EndTime=datetime(2024, 1, 2, 9)),
    ]
    total = total_logged_hours(entries)
    assert total == 3.5
    assert is_overtime(total, 3) is True
    assert is_overtime(total, 4) is False
    assert is_overtime(total, 3.5) is False
    # tahmin yoksa / sıfırsa overtime yok
    assert is_overtime(total, None) is False
    assert is_overtime(total, 0) is False
