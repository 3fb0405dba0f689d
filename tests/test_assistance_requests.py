"""
Assistance request tests.
"""
import pytest

from pwd_registry.utils.constants import RequestStatus

from conftest import API


@pytest.fixture
def beneficiary(make_record):
    return make_record(full_name="Kojo Antwi")


def test_create_request(client, officer_user, officer_headers, beneficiary, reference_data):
    response = client.post(
        f"{API}/assistance-requests/",
        json={
            "assistance_type_id": reference_data["wheelchair"],
            "beneficiary_id": beneficiary.id,
            "description": "Needs a wheelchair",
            "amount_value_cost": 1500.5,
        },
        headers=officer_headers,
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["status"] == "pending"
    assert data["requested_by"] == officer_user.id
    assert data["beneficiary_name"] == "Kojo Antwi"
    assert data["assistance_type_name"] == "Wheelchair"
    assert data["amount_value_cost"] == 1500.5


def test_create_requires_existing_beneficiary_and_type(client, officer_headers, beneficiary, reference_data):
    missing_beneficiary = client.post(
        f"{API}/assistance-requests/",
        json={"assistance_type_id": reference_data["wheelchair"], "beneficiary_id": 999},
        headers=officer_headers,
    )
    assert missing_beneficiary.status_code == 422

    missing_type = client.post(
        f"{API}/assistance-requests/",
        json={"assistance_type_id": 999, "beneficiary_id": beneficiary.id},
        headers=officer_headers,
    )
    assert missing_type.status_code == 422


@pytest.mark.parametrize("status", [s.value for s in RequestStatus])
def test_admin_sets_every_workflow_status(client, admin_headers, beneficiary, make_request, status):
    request = make_request(beneficiary)
    response = client.patch(
        f"{API}/assistance-requests/{request.id}/status", json={"status": status}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == status


def test_unknown_request_status_is_rejected(client, admin_headers, beneficiary, make_request):
    request = make_request(beneficiary)
    response = client.patch(
        f"{API}/assistance-requests/{request.id}/status", json={"status": "approved"}, headers=admin_headers
    )
    assert response.status_code == 422


def test_status_update_is_admin_only(client, officer_headers, beneficiary, make_request):
    request = make_request(beneficiary)
    response = client.patch(
        f"{API}/assistance-requests/{request.id}/status", json={"status": "review"}, headers=officer_headers
    )
    assert response.status_code == 403


def test_admin_notes_overwrite(client, admin_headers, beneficiary, make_request):
    request = make_request(beneficiary)
    url = f"{API}/assistance-requests/{request.id}/status"

    client.patch(url, json={"status": "review", "admin_notes": "Check documents"}, headers=admin_headers)
    response = client.patch(url, json={"status": "assessed", "admin_notes": "Approved"}, headers=admin_headers)
    assert response.json()["data"]["admin_review_notes"] == "Approved"

    # Without notes the previous notes stay
    response = client.patch(url, json={"status": "ready_to_access"}, headers=admin_headers)
    assert response.json()["data"]["admin_review_notes"] == "Approved"


def test_general_update(client, officer_headers, beneficiary, make_request):
    request = make_request(beneficiary)
    response = client.patch(
        f"{API}/assistance-requests/{request.id}",
        json={"description": "Updated description", "status": "review"},
        headers=officer_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["description"] == "Updated description"
    assert response.json()["data"]["status"] == "review"


def test_filters_and_views(
    client, admin_user, officer_headers, admin_headers, make_record, make_request, reference_data
):
    ama = make_record(full_name="Ama Asante")
    kofi = make_record(full_name="Kofi Boadu")
    make_request(ama, description="Wheelchair repair")
    make_request(ama, status=RequestStatus.ASSESSED, assistance_type_id=reference_data["school_fees"])
    make_request(kofi, requested_by=admin_user.id, description="School fees for term")

    def total(path, **params):
        response = client.get(f"{API}/assistance-requests{path}", params=params, headers=officer_headers)
        assert response.status_code == 200
        return response.json()["data"]["pagination"]["total_records"]

    assert total("/list") == 3
    assert total("/list", status="assessed") == 1
    assert total("/list", assistance_type_id=reference_data["school_fees"]) == 1
    assert total("/list", beneficiary_name="asante") == 2
    assert total("/list", search="school fees") == 1
    assert total("/list", search="kofi") == 1
    assert total(f"/beneficiary/{ama.id}") == 2
    assert total(f"/user/{admin_user.id}") == 1
    assert total("/status/pending") == 2
    assert total("/my-requests") == 2

    mine = client.get(f"{API}/assistance-requests/my-requests", headers=admin_headers)
    assert mine.json()["data"]["pagination"]["total_records"] == 1


def test_delete_request_is_admin_only(client, officer_headers, admin_headers, beneficiary, make_request):
    request = make_request(beneficiary)
    request_id = request.id

    assert client.delete(f"{API}/assistance-requests/{request_id}", headers=officer_headers).status_code == 403
    assert client.delete(f"{API}/assistance-requests/{request_id}", headers=admin_headers).status_code == 200
    assert client.get(f"{API}/assistance-requests/{request_id}", headers=admin_headers).status_code == 404
