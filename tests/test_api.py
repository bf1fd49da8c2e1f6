"""
API route tests - verifies endpoints against a temporary data file
"""
import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from quarantine.api.utils import get_store, get_today
from quarantine.database.storage import PatientStore
from quarantine.main import app

TODAY = "2024-01-03"


@pytest.fixture
def store(tmp_path):
    """Patient store in a temporary directory, wired into the app"""
    temp_store = PatientStore(str(tmp_path / "patients.json"))
    app.dependency_overrides[get_store] = lambda: temp_store
    yield temp_store
    app.dependency_overrides.pop(get_store, None)


@pytest.fixture
def clinical_day():
    """Mutable "today" for the app, starting at TODAY"""
    day = {"value": TODAY}
    app.dependency_overrides[get_today] = lambda: day["value"]
    yield day
    app.dependency_overrides.pop(get_today, None)


@pytest.fixture
def client(store, clinical_day):
    """Test client"""
    return TestClient(app)


def admit(client, name="John Doe", age=45, bed=1):
    return client.post("/api/v1/patients", json={"name": name, "age": age, "bed": bed})


def test_root(client):
    """Test root endpoint"""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_admit_patient(client, store):
    """Test admitting a patient and verify the data file is written"""
    response = admit(client)

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == "P001"
    assert data["records"] == []
    assert data["discharged"] is False

    patient_file = Path(store.filepath)
    assert patient_file.exists(), f"Patient file should be created at {patient_file}"
    with open(patient_file, 'r') as f:
        saved_data = json.load(f)
        assert len(saved_data) == 1
        assert saved_data[0]["name"] == "John Doe"


def test_admit_validation(client, store):
    """Test that admission errors carry the failed check and write nothing"""
    response = admit(client, name="  ")
    assert response.status_code == 422
    assert response.json()["detail"]["reason"] == "empty_name"

    admit(client, bed=3)
    response = admit(client, name="Other", bed=3)
    assert response.status_code == 422
    assert response.json()["detail"]["reason"] == "bed_taken"
    assert response.json()["detail"]["message"] == "Bed already assigned"
    assert len(store.load()) == 1


def test_list_patients_sorted_and_filtered(client):
    """Test the patient table ordering and search"""
    admit(client, name="Zed", bed=9)
    admit(client, name="Amy", bed=2)

    rows = client.get("/api/v1/patients").json()
    assert [row["bed"] for row in rows] == [2, 9]
    assert rows[0]["status"]["label"] == "Needs Temp"

    rows = client.get("/api/v1/patients", params={"q": "zE"}).json()
    assert [row["name"] for row in rows] == ["Zed"]
    rows = client.get("/api/v1/patients", params={"q": "p002"}).json()
    assert [row["name"] for row in rows] == ["Amy"]


def test_daily_flow_to_discharge(client, clinical_day):
    """Test temperature and visit recording over three days, then discharge"""
    admit(client)

    for day in ["2024-01-01", "2024-01-02", "2024-01-03"]:
        clinical_day["value"] = day
        response = client.post("/api/v1/patients/P001/discharge")
        assert response.status_code == 409
        assert response.json()["detail"]["kind"] == "not_eligible"

        assert client.post("/api/v1/patients/P001/temperature", json={"temp": 36.7}).status_code == 200
        assert client.get("/api/v1/patients/P001/status").json()["code"] == "needs_visit"
        assert client.post("/api/v1/patients/P001/visits", json={"notes": "ok"}).status_code == 200

    status = client.get("/api/v1/patients/P001/status").json()
    assert status["code"] == "eligible_discharge"
    assert status["fever_free_days"] == 3

    response = client.post("/api/v1/patients/P001/discharge")
    assert response.status_code == 200
    assert response.json()["discharged"] is True
    assert client.post("/api/v1/patients/P001/discharge").status_code == 200
    assert client.get("/api/v1/patients/P001/status").json()["label"] == "Discharged"

    # Bed 1 is free again
    assert admit(client, name="Next", bed=1).json()["id"] == "P002"


def test_duplicate_temperature(client):
    """Test that a second reading on the same day is rejected"""
    admit(client)
    client.post("/api/v1/patients/P001/temperature", json={"temp": "36.9"})
    response = client.post("/api/v1/patients/P001/temperature", json={"temp": 38.0})

    assert response.status_code == 409
    assert response.json()["detail"]["kind"] == "duplicate_for_date"
    detail = client.get("/api/v1/patients/P001").json()
    assert detail["recent_records"] == [{"date": TODAY, "temp": 36.9}]


def test_invalid_temperature(client):
    admit(client)
    response = client.post("/api/v1/patients/P001/temperature", json={"temp": 0})
    assert response.status_code == 422
    assert response.json()["detail"]["kind"] == "invalid_value"


def test_unknown_patient(client):
    assert client.get("/api/v1/patients/P999").status_code == 404
    assert client.get("/api/v1/patients/P999/status").status_code == 404
    assert client.post("/api/v1/patients/P999/deceased").status_code == 404


def test_mark_deceased(client):
    admit(client)
    response = client.post("/api/v1/patients/P001/deceased")
    assert response.status_code == 200
    assert response.json()["deceased"] is True
    assert client.get("/api/v1/patients/P001/status").json()["code"] == "deceased"


def test_dashboard(client):
    """Test KPIs and to-do counts"""
    assert client.get("/api/v1/dashboard/kpis").json() == {
        "total": 0,
        "temp_compliance_pct": 0,
        "visit_compliance_pct": 0,
        "discharged_count": 0,
        "mortality_pct": 0,
    }

    admit(client, bed=1)
    admit(client, name="Jane", bed=2)
    client.post("/api/v1/patients/P001/temperature", json={"temp": 37.0})
    client.post("/api/v1/patients/P002/deceased")

    kpis = client.get("/api/v1/dashboard/kpis").json()
    assert kpis["total"] == 2
    assert kpis["temp_compliance_pct"] == 50
    assert kpis["mortality_pct"] == 50
    assert client.get("/api/v1/dashboard/todo").json() == {"need_temp": 0, "need_visit": 1}


def test_export_import(client, store):
    """Test that an exported collection re-imports unchanged"""
    admit(client)
    client.post("/api/v1/patients/P001/temperature", json={"temp": 36.4})

    exported = client.get("/api/v1/export")
    assert exported.status_code == 200
    assert "quarantine_data.json" in exported.headers["content-disposition"]
    before = store.load()

    client.delete("/api/v1/patients")
    assert client.get("/api/v1/patients").json() == []

    response = client.post("/api/v1/import", content=exported.content)
    assert response.status_code == 200
    assert store.load() == before


def test_import_invalid_json(client):
    response = client.post("/api/v1/import", content=b"not json")
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid JSON"


def test_broken_import_reports_storage_error(client):
    """Test that a non-collection import fails on the next read"""
    client.post("/api/v1/import", content=b'{"not": "a list"}')
    response = client.get("/api/v1/patients")
    assert response.status_code == 500


@pytest.mark.parametrize(
    "payload, reason",
    [
        ({"name": None, "age": 30, "bed": 1}, "empty_name"),
        ({"name": "Ann", "age": "abc", "bed": 1}, "invalid_age"),
        ({"name": "Ann", "age": 30, "bed": 1.5}, "invalid_bed"),
        ({"name": "Ann", "age": 30}, "invalid_bed"),
    ],
)
def test_admit_loose_input_reports_reason(client, store, payload, reason):
    """Test that malformed form values get the admission error, not a schema error"""
    response = client.post("/api/v1/patients", json=payload)
    assert response.status_code == 422
    assert response.json()["detail"]["reason"] == reason
    assert store.load() == []


def test_mutations_log_applied_and_rejected(client, caplog):
    """Test that applied and rejected mutations are both logged"""
    with caplog.at_level("INFO", logger="quarantine.api.utils"):
        admit(client)
        admit(client)
    messages = [r.getMessage() for r in caplog.records if r.name == "quarantine.api.utils"]
    assert "admit applied to patient P001" in messages
    assert any(m.startswith("admit rejected: validation_error") for m in messages)
