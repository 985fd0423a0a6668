def test_create_work_center_with_defaults(admin_client):
    r = admin_client.post("/work-centers", json={
        "Name": "Assembly Line 1", "Code": "WC-ASM-1", "CostPerHour": "120.456",
        "AlternativeWorkCenters": ["WC-ASM-2", "WC-ASM-3"],
    })
    assert r.status_code == 201, r.text
    wc = r.json()["data"]
    assert wc["CostPerHour"] == 120.46
    assert wc["Capacity"] == 1
    assert wc["TimeEfficiency"] == 100
    assert wc["OEETarget"] == 0
    assert wc["Status_s"] == "active"
    assert wc["AlternativeWorkCenters"] == ["WC-ASM-2", "WC-ASM-3"]


def test_duplicate_code_is_a_field_conflict(admin_client):
    admin_client.post("/work-centers", json={"Name": "A", "Code": "WC-1"})
    r = admin_client.post("/work-centers", json={"Name": "B", "Code": "WC-1"})
    assert r.status_code == 400
    assert r.json()["meta"]["field"] == "Code"


def test_invalid_numbers_are_rejected(admin_client):
    base = {"Name": "A", "Code": "WC-1"}
    assert admin_client.post("/work-centers", json={**base, "CostPerHour": -1}).status_code == 422
    assert admin_client.post("/work-centers", json={**base, "Capacity": 0}).status_code == 422
    assert admin_client.post("/work-centers", json={**base, "TimeEfficiency": 120}).status_code == 422


def test_update_work_center(admin_client):
    wc = admin_client.post("/work-centers", json={"Name": "A", "Code": "WC-1"}).json()["data"]
    r = admin_client.patch(f"/work-centers/{wc['WorkCenterID']}", json={"OEETarget": 85, "Status_s": "scrapped"})
    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["OEETarget"] == 85
    assert data["Status_s"] == "scrapped"
    assert data["Code"] == "WC-1"

    listed = admin_client.get("/work-centers", params={"status": "active"}).json()["data"]
    assert listed == []
    assert admin_client.get("/work-centers/999").status_code == 404
