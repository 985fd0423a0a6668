import pytest


@pytest.mark.parametrize("path,pk", [("/departments", "DepartmentID"), ("/categories", "CategoryID")])
def test_create_list_get(admin_client, path, pk):
    r = admin_client.post(path, json={"Name": "  Production ", "Description": "Main hall"})
    assert r.status_code == 201, r.text
    row = r.json()["data"]
    assert row["Name"] == "Production"

    listed = admin_client.get(path).json()
    assert listed["meta"]["count"] == 1
    assert listed["data"][0][pk] == row[pk]

    assert admin_client.get(f"{path}/{row[pk]}").json()["data"]["Description"] == "Main hall"
    assert admin_client.get(f"{path}/999").status_code == 404


def test_name_is_required(admin_client):
    assert admin_client.post("/categories", json={"Name": ""}).status_code == 422
