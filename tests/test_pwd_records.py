"""
PWD record tests: registration, pairing validation, filters, pagination,
status workflow and guarded deletion.
"""
import pytest

from pwd_registry.models import PwdRecord, PwdGuardian, AssistanceRequest
from pwd_registry.utils.constants import Quarter, PwdStatus, RequestStatus
from pwd_registry.utils.date_utils import current_period

from conftest import API


@pytest.fixture
def payload(reference_data):
    return {
        "quarter": "Q2",
        "year": 2024,
        "gender_id": reference_data["male"],
        "full_name": "Kwame Mensah",
        "occupation": "Teacher",
        "contact": "0244123456",
        "dob": "1990-05-17",
        "gh_card_number": "GHA-123456789-0",
        "nhis_number": "NH-0001",
        "disability_category_id": reference_data["visual"],
        "disability_type_id": reference_data["low_vision"],
        "community_id": reference_data["tema"],
        "assistance_type_needed_id": reference_data["wheelchair"],
        "support_needs": "Braille materials",
        "supporting_documents": ["docs/medical.pdf"],
    }


def test_create_returns_thin_response(client, officer_headers, payload):
    response = client.post(f"{API}/pwd-records/", json=payload, headers=officer_headers)
    assert response.status_code == 201
    data = response.json()["data"]
    assert set(data) == {"id", "full_name", "status", "created_at"}
    assert data["status"] == "pending"
    assert data["full_name"] == "Kwame Mensah"


def test_created_record_round_trips(client, officer_user, officer_headers, payload):
    created = client.post(f"{API}/pwd-records/", json=payload, headers=officer_headers).json()["data"]

    response = client.get(f"{API}/pwd-records/{created['id']}", headers=officer_headers)
    assert response.status_code == 200
    record = response.json()["data"]
    for field, value in payload.items():
        assert record[field] == value
    assert record["age"] is not None
    assert record["community_name"] == "Tema"
    assert record["disability_category"] == "Visual Impairment"
    assert record["disability_type"] == "Low Vision"
    assert record["gender_name"] == "male"
    assert record["assistance_type_name"] == "Wheelchair"
    assert record["registered_by"] == officer_user.username


def test_ids_are_unique_and_increasing(client, officer_headers, payload):
    ids = [
        client.post(f"{API}/pwd-records/", json=payload, headers=officer_headers).json()["data"]["id"]
        for _ in range(3)
    ]
    assert ids == sorted(set(ids))


def test_type_from_other_category_is_rejected(client, officer_headers, payload, reference_data):
    payload["disability_category_id"] = reference_data["visual"]
    payload["disability_type_id"] = reference_data["amputation"]

    response = client.post(f"{API}/pwd-records/", json=payload, headers=officer_headers)
    assert response.status_code == 422
    assert "does not belong" in response.json()["message"]


def test_unknown_references_are_listed(client, officer_headers, payload):
    payload["community_id"] = 999
    payload["gender_id"] = 998

    response = client.post(f"{API}/pwd-records/", json=payload, headers=officer_headers)
    assert response.status_code == 422
    message = response.json()["message"]
    assert "community_id 999" in message
    assert "gender_id 998" in message


def test_missing_required_field_is_validation_error(client, officer_headers, payload):
    del payload["full_name"]
    response = client.post(f"{API}/pwd-records/", json=payload, headers=officer_headers)
    assert response.status_code == 422
    assert response.json()["status"] == "error"


def test_invalid_quarter_is_rejected(client, officer_headers, payload):
    payload["quarter"] = "Q5"
    response = client.post(f"{API}/pwd-records/", json=payload, headers=officer_headers)
    assert response.status_code == 422


def test_update_rechecks_pairing(client, officer_headers, make_record, reference_data):
    record = make_record(disability_type_id=reference_data["blindness"])

    response = client.patch(
        f"{API}/pwd-records/{record.id}",
        json={"disability_type_id": reference_data["amputation"]},
        headers=officer_headers,
    )
    assert response.status_code == 422

    response = client.patch(
        f"{API}/pwd-records/{record.id}",
        json={
            "disability_category_id": reference_data["physical"],
            "disability_type_id": reference_data["amputation"],
        },
        headers=officer_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["disability_type"] == "Amputation"


def test_update_cannot_clear_required_field(client, officer_headers, make_record):
    record = make_record()
    response = client.patch(
        f"{API}/pwd-records/{record.id}", json={"full_name": None}, headers=officer_headers
    )
    assert response.status_code == 422


def test_status_update_is_admin_only(client, officer_headers, admin_headers, make_record):
    record = make_record()

    denied = client.patch(
        f"{API}/pwd-records/{record.id}/status", json={"status": "approved"}, headers=officer_headers
    )
    assert denied.status_code == 403

    approved = client.patch(
        f"{API}/pwd-records/{record.id}/status", json={"status": "approved"}, headers=admin_headers
    )
    assert approved.status_code == 200
    assert approved.json()["data"]["status"] == "approved"


def test_unknown_status_is_rejected(client, admin_headers, make_record):
    record = make_record()
    response = client.patch(
        f"{API}/pwd-records/{record.id}/status", json={"status": "blocked"}, headers=admin_headers
    )
    assert response.status_code == 422

    fetched = client.get(f"{API}/pwd-records/{record.id}", headers=admin_headers)
    assert fetched.json()["data"]["status"] == "pending"


def test_pagination_over_45_records(client, officer_headers, make_record):
    for _ in range(45):
        make_record()

    sizes = []
    for page in (1, 2, 3):
        response = client.get(
            f"{API}/pwd-records/list", params={"page": page, "per_page": 20}, headers=officer_headers
        )
        assert response.status_code == 200
        data = response.json()["data"]
        sizes.append(len(data["records"]))
        assert data["pagination"] == {
            "total_records": 45,
            "current_page": page,
            "per_page": 20,
            "total_pages": 3,
        }
    assert sizes == [20, 20, 5]


def test_per_page_above_maximum_is_rejected(client, officer_headers):
    response = client.get(
        f"{API}/pwd-records/list", params={"per_page": 1000}, headers=officer_headers
    )
    assert response.status_code == 422


def test_filters_combine_with_and(client, officer_headers, make_record, reference_data):
    make_record(quarter=Quarter.Q1, year=2024, community_id=reference_data["accra"])
    make_record(quarter=Quarter.Q1, year=2024, community_id=reference_data["tema"])
    make_record(quarter=Quarter.Q2, year=2024, community_id=reference_data["tema"])
    make_record(quarter=Quarter.Q1, year=2023, community_id=reference_data["tema"])

    response = client.get(
        f"{API}/pwd-records/list",
        params={"quarter": "Q1", "year": 2024, "community_id": reference_data["tema"]},
        headers=officer_headers,
    )
    data = response.json()["data"]
    assert data["pagination"]["total_records"] == 1
    assert data["records"][0]["community_name"] == "Tema"


def test_search_is_case_insensitive_substring(client, officer_headers, make_record):
    make_record(full_name="Ama Serwaa")
    make_record(full_name="Yaw Boateng")
    make_record(full_name="Percent 100% Owusu")

    response = client.get(f"{API}/pwd-records/list", params={"search": "SERW"}, headers=officer_headers)
    names = [r["full_name"] for r in response.json()["data"]["records"]]
    assert names == ["Ama Serwaa"]

    response = client.get(f"{API}/pwd-records/list", params={"search": "0%"}, headers=officer_headers)
    names = [r["full_name"] for r in response.json()["data"]["records"]]
    assert names == ["Percent 100% Owusu"]


def test_path_scoped_reads(client, officer_headers, make_record, reference_data):
    make_record(quarter=Quarter.Q3, year=2025, status=PwdStatus.APPROVED)
    make_record(quarter=Quarter.Q3, year=2025, disability_category_id=reference_data["physical"],
                disability_type_id=reference_data["amputation"])

    by_period = client.get(f"{API}/pwd-records/quarterly/Q3/2025", headers=officer_headers)
    assert by_period.json()["data"]["pagination"]["total_records"] == 2

    by_category = client.get(
        f"{API}/pwd-records/category/{reference_data['physical']}", headers=officer_headers
    )
    assert by_category.json()["data"]["pagination"]["total_records"] == 1

    by_status = client.get(f"{API}/pwd-records/status/approved", headers=officer_headers)
    assert by_status.json()["data"]["pagination"]["total_records"] == 1

    bad_status = client.get(f"{API}/pwd-records/status/blocked", headers=officer_headers)
    assert bad_status.status_code == 422


def test_period_summary(client, officer_headers, make_record, reference_data):
    make_record(quarter=Quarter.Q4, year=2024, status=PwdStatus.APPROVED)
    make_record(quarter=Quarter.Q4, year=2024, status=PwdStatus.DECLINED,
                community_id=reference_data["tema"])
    make_record(quarter=Quarter.Q4, year=2024)

    response = client.get(f"{API}/pwd-records/quarterly/Q4/2024/summary", headers=officer_headers)
    assert response.json()["data"] == {
        "quarter": "Q4",
        "year": 2024,
        "total_records": 3,
        "approved": 1,
        "declined": 1,
        "pending": 1,
        "communities": 2,
        "categories": 1,
    }


def test_totals(client, officer_headers, make_record, make_request):
    quarter, year = current_period()
    assessed = make_record(quarter=quarter, year=year)
    make_record(quarter=Quarter.Q1, year=2000)
    make_request(assessed, status=RequestStatus.ASSESSED)
    make_request(assessed, status=RequestStatus.ASSESSED)

    response = client.get(f"{API}/pwd-records/totals", headers=officer_headers)
    data = response.json()["data"]
    assert data["total_pwd"] == 2
    assert data["registered_this_quarter"] == 1
    assert data["assessed_beneficiaries"] == 1


def test_delete_is_admin_only(client, officer_headers, make_record):
    record = make_record()
    response = client.delete(f"{API}/pwd-records/{record.id}", headers=officer_headers)
    assert response.status_code == 403


def test_delete_with_dependents_is_rejected_by_default(
    client, db_session, admin_headers, make_record, make_request
):
    record = make_record()
    make_request(record)
    db_session.add(PwdGuardian(pwd_id=record.id, name="Esi Mensah"))
    db_session.commit()
    record_id = record.id

    response = client.delete(f"{API}/pwd-records/{record_id}", headers=admin_headers)
    assert response.status_code == 409
    message = response.json()["message"]
    assert "pwd_guardians" in message
    assert "assistance_requests" in message

    cascaded = client.delete(f"{API}/pwd-records/{record_id}?cascade=true", headers=admin_headers)
    assert cascaded.status_code == 200
    assert db_session.query(PwdRecord).filter(PwdRecord.id == record_id).count() == 0
    assert db_session.query(PwdGuardian).count() == 0
    assert db_session.query(AssistanceRequest).count() == 0


def test_delete_without_dependents(client, admin_headers, make_record):
    record = make_record()
    record_id = record.id

    response = client.delete(f"{API}/pwd-records/{record_id}", headers=admin_headers)
    assert response.status_code == 200
    assert client.get(f"{API}/pwd-records/{record_id}", headers=admin_headers).status_code == 404
