import pytest
from fastapi.testclient import TestClient
from conftest import FakeStore

import main
from services.enquiry_form import FAILURE_MESSAGE, INVALID_EMAIL_MESSAGE, SUCCESS_MESSAGE, UNEXPECTED_MESSAGE
from services.supabase_enquiry_service import InsertResult, PersistenceError


@pytest.fixture
def api(fake_store):
    main.app.dependency_overrides[main.get_enquiry_store] = lambda: fake_store
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()


def test_health(api):
    response = api.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_form_definition_lists_every_field(api):
    response = api.get("/api/enquiry-form")

    assert response.status_code == 200
    fields = {field["name"]: field for field in response.json()}
    assert list(fields) == [
        "name", "email", "mobile", "timeline", "financing", "purpose",
        "decision_maker", "activity", "budget", "site_visit",
    ]
    assert all(field["required"] for field in fields.values())
    assert ["Premium", "Above ₹1.5 Crore"] in fields["budget"]["options"]
    assert fields["mobile"]["input_type"] == "tel"


def test_submit_enquiry(api, fake_store, valid_answers):
    response = api.post("/api/enquiries", json=valid_answers)

    assert response.status_code == 201
    assert response.json() == {"submitted": True, "message": SUCCESS_MESSAGE}
    assert fake_store.records[0].email == valid_answers["email"]


def test_submit_with_missing_field(api, fake_store, valid_answers):
    del valid_answers["timeline"]

    response = api.post("/api/enquiries", json=valid_answers)

    assert response.status_code == 400
    assert "timeline" in response.json()["message"]
    assert fake_store.records == []


def test_submit_with_bad_email(api, fake_store, valid_answers):
    valid_answers["email"] = "asha@example"

    response = api.post("/api/enquiries", json=valid_answers)

    assert response.status_code == 400
    assert response.json() == {"submitted": False, "message": INVALID_EMAIL_MESSAGE}
    assert fake_store.records == []


def test_store_rejection_is_bad_gateway(api, fake_store, valid_answers):
    fake_store.result = InsertResult(error=PersistenceError(message="permission denied", code="42501"))

    response = api.post("/api/enquiries", json=valid_answers)

    assert response.status_code == 502
    assert response.json()["message"] == FAILURE_MESSAGE


def test_store_fault_is_bad_gateway(api, fake_store, valid_answers):
    fake_store.error = RuntimeError("unexpected")

    response = api.post("/api/enquiries", json=valid_answers)

    assert response.status_code == 502
    assert response.json()["message"] == UNEXPECTED_MESSAGE


def test_submit_with_unknown_option(api, fake_store, valid_answers):
    valid_answers["site_visit"] = "Someday"

    response = api.post("/api/enquiries", json=valid_answers)

    assert response.status_code == 400
    assert response.json()["submitted"] is False
    assert "site_visit" in response.json()["message"]
    assert fake_store.records == []
