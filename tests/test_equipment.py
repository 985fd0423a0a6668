from gearguard.core.db import SessionLocal
from gearguard.models import ActivityLog, Equipment


def _consistent(eq):
    return (eq["Status_s"] == "scrapped") == (eq["ScrapDate"] is not None)


def test_new_equipment_is_active(new_equipment, ref):
    eq = new_equipment(DepartmentID=ref.department_id, Location="Hall A", PurchaseDate="2023-03-01")
    assert eq["Status_s"] == "active"
    assert eq["ScrapDate"] is None
    assert eq["PurchaseDate"] == "2023-03-01"


def test_scrap_date_toggles_status(admin_client, new_equipment):
    eq = new_equipment()
    url = f"/equipment/{eq['EquipmentID']}"

    r = admin_client.patch(url, json={"ScrapDate": "2024-05-01T10:00:00"})
    assert r.status_code == 200, r.text
    assert r.json()["data"]["Status_s"] == "scrapped"
    assert r.json()["data"]["ScrapDate"] == "2024-05-01T10:00:00"

    r = admin_client.patch(url, json={"ScrapDate": None})
    assert r.json()["data"]["Status_s"] == "active"
    assert r.json()["data"]["ScrapDate"] is None


def test_status_toggles_scrap_date(admin_client, new_equipment):
    eq = new_equipment()
    url = f"/equipment/{eq['EquipmentID']}"

    scrapped = admin_client.put(url, json={"Status_s": "scrapped"}).json()["data"]
    assert scrapped["ScrapDate"] is not None

    active = admin_client.put(url, json={"Status_s": "active"}).json()["data"]
    assert active["ScrapDate"] is None
    assert _consistent(scrapped) and _consistent(active)


def test_created_with_scrap_date_is_scrapped(new_equipment):
    eq = new_equipment(ScrapDate="2024-01-01T00:00:00", Status_s="active")
    assert eq["Status_s"] == "scrapped"
    assert _consistent(eq)


def test_unrelated_edit_keeps_scrap_state(admin_client, new_equipment):
    eq = new_equipment(Status_s="scrapped")
    r = admin_client.patch(f"/equipment/{eq['EquipmentID']}", json={"Notes": "kept for parts"})
    data = r.json()["data"]
    assert data["Status_s"] == "scrapped"
    assert data["ScrapDate"] == eq["ScrapDate"]
    assert data["Notes"] == "kept for parts"


def test_duplicate_serial_number_is_a_field_conflict(admin_client, new_equipment, ref):
    new_equipment(SerialNumber="CNC-1")
    r = admin_client.post("/equipment", json={"Name": "Other", "SerialNumber": "CNC-1", "CategoryID": ref.category_id})
    assert r.status_code == 400
    assert r.json()["meta"]["field"] == "SerialNumber"
    with SessionLocal() as s:
        assert s.query(Equipment).count() == 1


def test_serial_number_conflict_on_update(admin_client, new_equipment):
    new_equipment(SerialNumber="CNC-1")
    other = new_equipment(SerialNumber="CNC-2")
    r = admin_client.patch(f"/equipment/{other['EquipmentID']}", json={"SerialNumber": "CNC-1"})
    assert r.status_code == 400
    assert r.json()["meta"]["field"] == "SerialNumber"


def test_unknown_references_are_404(admin_client, ref):
    base = {"Name": "Press", "SerialNumber": "SN-X", "CategoryID": ref.category_id}
    assert admin_client.post("/equipment", json={**base, "CategoryID": 999}).status_code == 404
    assert admin_client.post("/equipment", json={**base, "MaintenanceTeamID": 999}).status_code == 404
    assert admin_client.post("/equipment", json={**base, "DefaultTechnicianID": 999}).status_code == 404
    assert admin_client.get("/equipment/999").status_code == 404


def test_list_filters(admin_client, new_equipment, ref):
    a = new_equipment(Name="CNC Lathe", SerialNumber="CNC-1", MaintenanceTeamID=ref.team_id)
    b = new_equipment(Name="Laptop", SerialNumber="LT-2042", Status_s="scrapped")

    def ids(**params):
        r = admin_client.get("/equipment", params=params)
        assert r.status_code == 200, r.text
        assert r.json()["meta"]["count"] == len(r.json()["data"])
        return {x["EquipmentID"] for x in r.json()["data"]}

    assert ids() == {a["EquipmentID"], b["EquipmentID"]}
    assert ids(status="scrapped") == {b["EquipmentID"]}
    assert ids(team_id=ref.team_id) == {a["EquipmentID"]}
    assert ids(q="lathe") == {a["EquipmentID"]}
    assert ids(q="2042") == {b["EquipmentID"]}
    assert ids(category_id=ref.category_id) == {a["EquipmentID"], b["EquipmentID"]}


def test_equipment_requests_with_open_count(admin_client, new_equipment, new_request):
    eq = new_equipment()
    new_request(EquipmentID=eq["EquipmentID"])
    new_request(EquipmentID=eq["EquipmentID"], Status_s="in_progress")
    new_request(EquipmentID=eq["EquipmentID"], Status_s="repaired")

    r = admin_client.get(f"/equipment/{eq['EquipmentID']}/requests")
    assert r.status_code == 200
    assert r.json()["meta"] == {"count": 3, "openCount": 2}


def test_equipment_changes_are_logged(admin_client, new_equipment):
    eq = new_equipment()
    admin_client.patch(f"/equipment/{eq['EquipmentID']}", json={"Status_s": "scrapped"})
    admin_client.patch(f"/equipment/{eq['EquipmentID']}", json={"Status_s": "active"})

    r = admin_client.get("/logs", params={"reference_type": "equipment", "reference_id": eq["EquipmentID"]})
    assert r.status_code == 200
    assert [x["Action"] for x in r.json()["data"]] == ["reactivated", "scrapped", "created"]
    with SessionLocal() as s:
        assert s.query(ActivityLog).filter_by(ReferenceType="equipment").count() == 3
