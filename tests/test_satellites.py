"""
Guardian, education and support-need tests.
"""
from conftest import API


def test_guardian_lifecycle(client, officer_headers, admin_headers, make_record):
    record = make_record()

    created = client.post(
        f"{API}/pwd-guardians/",
        json={"pwd_id": record.id, "name": "Esi Mensah", "phone": "0200000000", "relationship": "Mother"},
        headers=officer_headers,
    )
    assert created.status_code == 201
    guardian = created.json()["data"]
    assert guardian["relationship"] == "Mother"

    listed = client.get(f"{API}/pwd-guardians/pwd/{record.id}", headers=officer_headers)
    assert listed.json()["data"] == [guardian]

    updated = client.patch(
        f"{API}/pwd-guardians/{guardian['id']}", json={"occupation": "Trader"}, headers=officer_headers
    )
    assert updated.json()["data"]["occupation"] == "Trader"
    assert updated.json()["data"]["name"] == "Esi Mensah"

    denied = client.delete(f"{API}/pwd-guardians/{guardian['id']}", headers=officer_headers)
    assert denied.status_code == 403
    deleted = client.delete(f"{API}/pwd-guardians/{guardian['id']}", headers=admin_headers)
    assert deleted.status_code == 200
    assert client.get(f"{API}/pwd-guardians/{guardian['id']}", headers=officer_headers).status_code == 404


def test_second_guardian_is_conflict(client, officer_headers, make_record):
    record = make_record()
    body = {"pwd_id": record.id, "name": "First"}
    assert client.post(f"{API}/pwd-guardians/", json=body, headers=officer_headers).status_code == 201

    body["name"] = "Second"
    response = client.post(f"{API}/pwd-guardians/", json=body, headers=officer_headers)
    assert response.status_code == 409


def test_satellite_for_missing_pwd_is_not_found(client, officer_headers):
    response = client.post(
        f"{API}/pwd-education/", json={"pwd_id": 404, "education_level": "JHS"}, headers=officer_headers
    )
    assert response.status_code == 404

    response = client.get(f"{API}/pwd-support-needs/pwd/404", headers=officer_headers)
    assert response.status_code == 404


def test_education_statistics(client, officer_headers, make_record):
    levels = ["Primary", "JHS", "JHS"]
    for level in levels:
        record = make_record()
        client.post(
            f"{API}/pwd-education/",
            json={"pwd_id": record.id, "education_level": level, "school_name": "Akropong School"},
            headers=officer_headers,
        )

    response = client.get(f"{API}/pwd-education/statistics", headers=officer_headers)
    assert response.json()["data"] == [
        {"education_level": "JHS", "count": 2},
        {"education_level": "Primary", "count": 1},
    ]


def test_support_needs_allow_many_and_search(client, officer_headers, make_record):
    record = make_record(full_name="Abena Owusu")
    for need in ["Hearing aid batteries", "Transport to clinic", "Hearing test"]:
        response = client.post(
            f"{API}/pwd-support-needs/",
            json={"pwd_id": record.id, "assistance_needed": need},
            headers=officer_headers,
        )
        assert response.status_code == 201

    listed = client.get(f"{API}/pwd-support-needs/pwd/{record.id}", headers=officer_headers)
    assert len(listed.json()["data"]) == 3

    found = client.get(f"{API}/pwd-support-needs/search", params={"term": "HEARING"}, headers=officer_headers)
    results = found.json()["data"]
    assert [r["assistance_needed"] for r in results] == ["Hearing aid batteries", "Hearing test"]
    assert all(r["pwd_name"] == "Abena Owusu" for r in results)


def test_support_need_text_is_required(client, officer_headers, make_record):
    record = make_record()
    response = client.post(
        f"{API}/pwd-support-needs/", json={"pwd_id": record.id, "assistance_needed": ""}, headers=officer_headers
    )
    assert response.status_code == 422
