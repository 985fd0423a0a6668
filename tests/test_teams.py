from gearguard.core.db import SessionLocal
from gearguard.models import TeamMember


def _member_rows(team_id):
    with SessionLocal() as s:
        return s.query(TeamMember).filter_by(TeamID=team_id).count()


def test_create_team_with_members(admin_client, make_user):
    a = make_user("ali", role="technician")
    b = make_user("zeynep", role="technician")
    r = admin_client.post("/teams", json={"Name": "Mechanics", "MemberIDs": [a.UserID, b.UserID]})
    assert r.status_code == 201, r.text
    team = r.json()["data"]
    assert set(team["MemberIDs"]) == {a.UserID, b.UserID}

    listed = admin_client.get("/teams").json()["data"]
    assert [set(t["MemberIDs"]) for t in listed] == [{a.UserID, b.UserID}]


def test_omitted_members_are_untouched_and_empty_list_clears(admin_client, make_user):
    a = make_user("ali", role="technician")
    team = admin_client.post("/teams", json={"Name": "Mechanics", "MemberIDs": [a.UserID]}).json()["data"]
    url = f"/teams/{team['TeamID']}"

    r = admin_client.patch(url, json={"Name": "Mechanical Team"})
    assert r.status_code == 200
    assert r.json()["data"]["Name"] == "Mechanical Team"
    assert r.json()["data"]["MemberIDs"] == [a.UserID]
    assert _member_rows(team["TeamID"]) == 1

    r = admin_client.patch(url, json={"MemberIDs": []})
    assert r.json()["data"]["MemberIDs"] == []
    assert _member_rows(team["TeamID"]) == 0


def test_member_list_is_replaced_wholesale(admin_client, make_user):
    a = make_user("ali", role="technician")
    b = make_user("zeynep", role="technician")
    team = admin_client.post("/teams", json={"Name": "Mechanics", "MemberIDs": [a.UserID]}).json()["data"]

    r = admin_client.put(f"/teams/{team['TeamID']}", json={"MemberIDs": [b.UserID]})
    assert r.json()["data"]["MemberIDs"] == [b.UserID]

    # aynı listeyi tekrar yazmak da çalışır
    r = admin_client.put(f"/teams/{team['TeamID']}", json={"MemberIDs": [b.UserID, a.UserID]})
    assert set(r.json()["data"]["MemberIDs"]) == {a.UserID, b.UserID}
    assert _member_rows(team["TeamID"]) == 2


def test_duplicate_member_ids_are_rejected(admin_client, make_user):
    a = make_user("ali", role="technician")
    r = admin_client.post("/teams", json={"Name": "Mechanics", "MemberIDs": [a.UserID, a.UserID]})
    assert r.status_code == 422


def test_unknown_member_keeps_previous_members(admin_client, make_user):
    a = make_user("ali", role="technician")
    team = admin_client.post("/teams", json={"Name": "Mechanics", "MemberIDs": [a.UserID]}).json()["data"]

    r = admin_client.patch(f"/teams/{team['TeamID']}", json={"MemberIDs": [999]})
    assert r.status_code == 404
    assert "999" in r.json()["error"]
    assert admin_client.get(f"/teams/{team['TeamID']}").json()["data"]["MemberIDs"] == [a.UserID]


def test_unknown_team_is_404(admin_client):
    assert admin_client.get("/teams/42").status_code == 404
    assert admin_client.patch("/teams/42", json={"Name": "x"}).status_code == 404
