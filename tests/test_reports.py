def test_dashboard_counts(admin_client, client_for, make_user, new_equipment, new_request, ref):
    make_user("alice")
    alice = client_for("alice")
    eq = new_equipment(MaintenanceTeamID=ref.team_id)
    other = new_equipment()

    new_request(EquipmentID=eq["EquipmentID"], Priority_s="high")
    new_request(EquipmentID=eq["EquipmentID"], Status_s="in_progress")
    new_request(EquipmentID=other["EquipmentID"], Priority_s="high", Status_s="repaired")
    new_request(client=alice, EquipmentID=other["EquipmentID"])
    scrap = new_request(client=alice, EquipmentID=other["EquipmentID"])
    alice.patch(f"/requests/{scrap['RequestID']}", json={"Status_s": "scrap"})

    r = admin_client.get("/reports/dashboard")
    assert r.status_code == 200, r.text
    d = r.json()["data"]
    assert d["totalRequests"] == 5
    assert d["openRequests"] == 3
    assert d["inProgress"] == 1
    assert d["highPriority"] == 1
    assert d["repairedThisMonth"] == 1
    assert d["equipmentScrapped"] == 1
    assert d["statusDistribution"] == {"new": 2, "in_progress": 1, "repaired": 1, "scrap": 1}
    assert d["requestsByTeam"] == [{"teamId": ref.team_id, "teamName": "Mechanics", "count": 2}]
    # admin'in açtığı, kapanmamış talepler
    assert d["myOpenRequests"] == 2

    assert alice.get("/reports/dashboard").json()["data"]["myOpenRequests"] == 1


def test_dashboard_on_empty_database(admin_client):
    d = admin_client.get("/reports/dashboard").json()["data"]
    assert d["totalRequests"] == 0
    assert d["statusDistribution"] == {"new": 0, "in_progress": 0, "repaired": 0, "scrap": 0}
    assert d["requestsByTeam"] == []
