"""
Activity log tests: automatic recording of writes and the admin log endpoints.
"""
from datetime import datetime, timedelta

import pytest

from pwd_registry.models import ActivityLog
from pwd_registry.services.activity_log_service import describe_request

from conftest import API, ADMIN_PASSWORD


@pytest.fixture
def make_log(db_session):
    def _make(user, activity, timestamp=None):
        entry = ActivityLog(user_id=user.id, activity=activity, timestamp=timestamp or datetime.now())
        db_session.add(entry)
        db_session.commit()
        return entry
    return _make


def test_successful_write_is_recorded(client, admin_user, admin_headers):
    created = client.post(f"{API}/communities/", json={"name": "Kumasi"}, headers=admin_headers)
    assert created.status_code == 201

    response = client.get(f"{API}/logs/", headers=admin_headers)
    assert response.status_code == 200
    logs = response.json()["data"]["logs"]
    assert len(logs) == 1
    assert logs[0]["user_id"] == admin_user.id
    assert logs[0]["username"] == admin_user.username
    assert logs[0]["activity"] == f"POST request to {API}/communities/"


def test_failed_write_is_not_recorded(client, admin_headers, db_session, reference_data):
    duplicate = client.post(f"{API}/communities/", json={"name": "tema"}, headers=admin_headers)
    assert duplicate.status_code == 409

    invalid = client.post(f"{API}/communities/", json={"name": ""}, headers=admin_headers)
    assert invalid.status_code == 422

    assert db_session.query(ActivityLog).count() == 0


def test_reads_and_anonymous_writes_are_not_recorded(client, admin_user, officer_headers, db_session):
    client.get(f"{API}/communities/list", headers=officer_headers)
    client.post(
        f"{API}/users/login",
        json={"identifier": admin_user.username, "password": ADMIN_PASSWORD},
    )

    assert db_session.query(ActivityLog).count() == 0


def test_area_prefix_in_activity(client, officer_user, officer_headers, make_record, db_session):
    record = make_record()
    response = client.patch(
        f"{API}/pwd-records/{record.id}",
        json={"occupation": "Weaver"},
        headers=officer_headers,
    )
    assert response.status_code == 200

    entry = db_session.query(ActivityLog).one()
    assert entry.user_id == officer_user.id
    assert entry.activity == f"PWD record: PATCH request to {API}/pwd-records/{record.id}"


def test_describe_request_prefixes():
    assert describe_request("DELETE", "/api/v1/users/4", "/api/v1") == \
        "User management: DELETE request to /api/v1/users/4"
    assert describe_request("POST", "/api/v1/assistance-requests/", "/api/v1") == \
        "Assistance request: POST request to /api/v1/assistance-requests/"
    assert describe_request("POST", "/api/v1/communities/", "/api/v1") == \
        "POST request to /api/v1/communities/"


def test_log_endpoints_require_admin(client, officer_headers):
    response = client.get(f"{API}/logs/", headers=officer_headers)
    assert response.status_code == 403


def test_manual_entry_is_recorded_once(client, officer_user, officer_headers, db_session):
    response = client.post(f"{API}/logs/", json={"activity": "Printed quarterly register"}, headers=officer_headers)
    assert response.status_code == 201
    assert response.json()["data"]["activity"] == "Printed quarterly register"

    entries = db_session.query(ActivityLog).all()
    assert len(entries) == 1
    assert entries[0].user_id == officer_user.id


def test_manual_entry_requires_activity(client, officer_headers):
    response = client.post(f"{API}/logs/", json={"activity": ""}, headers=officer_headers)
    assert response.status_code == 422


def test_logs_by_user(client, admin_user, officer_user, admin_headers, make_log):
    make_log(officer_user, "Registered beneficiary")
    make_log(admin_user, "Approved request")

    response = client.get(f"{API}/logs/user/{officer_user.id}", headers=admin_headers)
    assert response.status_code == 200
    logs = response.json()["data"]["logs"]
    assert [log["activity"] for log in logs] == ["Registered beneficiary"]

    missing = client.get(f"{API}/logs/user/9999", headers=admin_headers)
    assert missing.status_code == 404


def test_search_logs_is_case_insensitive(client, officer_user, admin_headers, make_log):
    make_log(officer_user, "Updated Guardian details")
    make_log(officer_user, "Created request")

    response = client.get(f"{API}/logs/search", params={"q": "guardian"}, headers=admin_headers)
    logs = response.json()["data"]["logs"]
    assert [log["activity"] for log in logs] == ["Updated Guardian details"]


def test_logs_by_date_range_includes_end_day(client, officer_user, admin_headers, make_log):
    make_log(officer_user, "March entry", datetime(2024, 3, 31, 23, 30))
    make_log(officer_user, "April entry", datetime(2024, 4, 1, 8, 0))

    response = client.get(
        f"{API}/logs/date-range",
        params={"start_date": "2024-03-01", "end_date": "2024-03-31"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert [log["activity"] for log in response.json()["data"]["logs"]] == ["March entry"]

    reversed_range = client.get(
        f"{API}/logs/date-range",
        params={"start_date": "2024-04-01", "end_date": "2024-03-01"},
        headers=admin_headers,
    )
    assert reversed_range.status_code == 422


def test_logs_are_paginated_newest_first(client, officer_user, admin_headers, make_log):
    start = datetime(2024, 1, 1, 9, 0)
    for i in range(5):
        make_log(officer_user, f"entry {i}", start + timedelta(minutes=i))

    response = client.get(f"{API}/logs/", params={"page": 2, "per_page": 2}, headers=admin_headers)
    data = response.json()["data"]
    assert [log["activity"] for log in data["logs"]] == ["entry 2", "entry 1"]
    assert data["pagination"]["total_records"] == 5
    assert data["pagination"]["total_pages"] == 3


def test_cleanup_keeps_recent_entries(client, officer_user, admin_headers, db_session, make_log):
    make_log(officer_user, "old", datetime.now() - timedelta(days=120))
    make_log(officer_user, "recent", datetime.now() - timedelta(days=5))

    too_short = client.delete(f"{API}/logs/cleanup/7", headers=admin_headers)
    assert too_short.status_code == 422

    response = client.delete(f"{API}/logs/cleanup/90", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["data"]["deleted_count"] == 1

    remaining = {e.activity for e in db_session.query(ActivityLog).all()}
    assert "old" not in remaining
    assert "recent" in remaining


def test_deleting_user_keeps_their_history(client, admin_headers, db_session, make_log):
    response = client.post(
        f"{API}/users/",
        json={"username": "temp", "email": "temp@example.com", "password": "secret123"},
        headers=admin_headers,
    )
    user_id = response.json()["data"]["id"]
    entry = ActivityLog(user_id=user_id, activity="Temporary work")
    db_session.add(entry)
    db_session.commit()

    deleted = client.delete(f"{API}/users/{user_id}", headers=admin_headers)
    assert deleted.status_code == 200

    db_session.refresh(entry)
    assert entry.user_id is None
