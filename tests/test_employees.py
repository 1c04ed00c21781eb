import uuid
from datetime import datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from hrfleet.main import app


@pytest.mark.asyncio
async def test_create_employee_success(employee_payload):
    payload = employee_payload(staffNumber=f"E001-{uuid.uuid4().hex[:6]}", fullName="A", identityNumber="1")
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/employees", json=payload)

    assert response.status_code == 201
    data = response.json()
    assert uuid.UUID(data["id"])
    assert data["staffNumber"] == payload["staffNumber"]
    assert data["fullName"] == "A"
    assert data["salary"] == 1000
    assert data["points"] == 0
    assert data["contractStatus"] == "active"
    assert data["pointsHistory"] == []
    assert data["academicTraining"] == []
    assert data["professionalTraining"] == []
    assert "createdAt" in data
    assert "updatedAt" in data


@pytest.mark.asyncio
async def test_create_employee_training_sets_are_deduplicated(employee_payload):
    payload = employee_payload(
        academicTraining=["BSc", "MSc", "BSc"],
        professionalTraining=["First aid"],
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/employees", json=payload)

    assert response.status_code == 201
    assert response.json()["academicTraining"] == ["BSc", "MSc"]
    assert response.json()["professionalTraining"] == ["First aid"]


@pytest.mark.asyncio
async def test_create_employee_ignores_client_points(employee_payload):
    payload = employee_payload(points=500, pointsHistory=[{"points": 500, "reason": "x"}])
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/employees", json=payload)

    assert response.status_code == 201
    assert response.json()["points"] == 0
    assert response.json()["pointsHistory"] == []


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["staffNumber", "fullName", "identityNumber", "qualifications", "position", "salary"])
async def test_create_employee_missing_required_field(employee_payload, missing):
    payload = employee_payload()
    del payload[missing]
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/employees", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert any(err["field"] == missing for err in body["errors"])


@pytest.mark.asyncio
async def test_create_employee_rejects_unknown_contract_status(employee_payload):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/employees", json=employee_payload(contractStatus="suspended"))

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_employee_duplicate_staff_number(employee_payload):
    first = employee_payload(fullName="Original")
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        created = await client.post("/employees", json=first)
        duplicate = await client.post(
            "/employees",
            json=employee_payload(staffNumber=first["staffNumber"], fullName="Impostor"),
        )
        listing = await client.get("/employees")

    assert created.status_code == 201
    assert duplicate.status_code == 400
    assert duplicate.json()["message"] == "Staff number must be unique"

    matching = [e for e in listing.json() if e["staffNumber"] == first["staffNumber"]]
    assert len(matching) == 1
    assert matching[0]["fullName"] == "Original"
    assert matching[0]["id"] == created.json()["id"]


@pytest.mark.asyncio
async def test_list_employees_returns_array(employee_payload):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        created = await client.post("/employees", json=employee_payload())
        response = await client.get("/employees")

    assert response.status_code == 200
    body = response.json()
    assert isinstance(body, list)
    assert created.json()["id"] in {e["id"] for e in body}


@pytest.mark.asyncio
async def test_get_employee(employee_payload):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        created = await client.post("/employees", json=employee_payload(position="Driver"))
        response = await client.get(f"/employees/{created.json()['id']}")

    assert response.status_code == 200
    assert response.json()["position"] == "Driver"


@pytest.mark.asyncio
async def test_update_employee_applies_given_fields_only(employee_payload):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        created = await client.post("/employees", json=employee_payload(position="Clerk"))
        employee_id = created.json()["id"]
        response = await client.put(
            f"/employees/{employee_id}",
            json={"position": "Manager", "salary": 2500.5, "contractStatus": "terminated"},
        )

    assert response.status_code == 200
    data = response.json()
    assert data["position"] == "Manager"
    assert data["salary"] == 2500.5
    assert data["contractStatus"] == "terminated"
    assert data["fullName"] == created.json()["fullName"]
    assert data["staffNumber"] == created.json()["staffNumber"]


@pytest.mark.asyncio
async def test_update_employee_cannot_touch_points(employee_payload):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        created = await client.post("/employees", json=employee_payload())
        response = await client.put(f"/employees/{created.json()['id']}", json={"points": 99})

    assert response.status_code == 200
    assert response.json()["points"] == 0


@pytest.mark.asyncio
async def test_update_employee_rejects_null_required_field(employee_payload):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        created = await client.post("/employees", json=employee_payload())
        response = await client.put(f"/employees/{created.json()['id']}", json={"fullName": None})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_employee_duplicate_staff_number(employee_payload):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        first = await client.post("/employees", json=employee_payload())
        second = await client.post("/employees", json=employee_payload())
        response = await client.put(
            f"/employees/{second.json()['id']}",
            json={"staffNumber": first.json()["staffNumber"]},
        )

    assert response.status_code == 400
    assert response.json()["message"] == "Staff number must be unique"


@pytest.mark.asyncio
async def test_update_employee_invalid_id():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.put("/employees/not-an-id", json={"position": "Manager"})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid employee ID"


@pytest.mark.asyncio
async def test_update_employee_not_found():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.put(f"/employees/{uuid.uuid4()}", json={"position": "Manager"})

    assert response.status_code == 404
    assert response.json()["message"] == "Employee not found"


@pytest.mark.asyncio
async def test_delete_employee(employee_payload):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        created = await client.post("/employees", json=employee_payload())
        employee_id = created.json()["id"]
        await client.patch(f"/employees/{employee_id}/add-points", json={"points": 3, "reason": "punctual"})
        response = await client.delete(f"/employees/{employee_id}")
        again = await client.delete(f"/employees/{employee_id}")
        lookup = await client.get(f"/employees/{employee_id}")

    assert response.status_code == 200
    assert response.json() == {"message": "Employee deleted successfully"}
    assert again.status_code == 404
    assert lookup.status_code == 404


@pytest.mark.asyncio
async def test_delete_employee_invalid_id():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.delete("/employees/12345")

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid employee ID"


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.mark.asyncio
async def test_timestamps_carry_utc_offset(employee_payload):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        created = await client.post("/employees", json=employee_payload())
        awarded = await client.patch(
            f"/employees/{created.json()['id']}/add-points",
            json={"points": 1, "reason": "on time"},
        )

    employee = awarded.json()["employee"]
    for value in (employee["createdAt"], employee["updatedAt"], employee["pointsHistory"][0]["date"]):
        assert _parse_timestamp(value).utcoffset() == timedelta(0)


@pytest.mark.asyncio
@pytest.mark.parametrize("raw_salary", [b"NaN", b"Infinity"])
async def test_non_finite_salary_is_a_validation_error(employee_payload, raw_salary):
    payload = employee_payload()
    body = (
        b'{"staffNumber": "' + payload["staffNumber"].encode() + b'", "fullName": "A", '
        b'"identityNumber": "1", "qualifications": "BSc", "position": "Clerk", "salary": ' + raw_salary + b"}"
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        rejected = await client.post("/employees", content=body, headers={"Content-Type": "application/json"})
        created = await client.post("/employees", json=payload)
        update = await client.put(
            f"/employees/{created.json()['id']}",
            content=b'{"salary": ' + raw_salary + b"}",
            headers={"Content-Type": "application/json"},
        )
        stored = await client.get(f"/employees/{created.json()['id']}")

    assert rejected.status_code == 400
    assert rejected.json()["message"] == "Validation failed"
    assert created.status_code == 201
    assert update.status_code == 400
    assert update.json()["message"] == "Validation failed"
    assert stored.json()["salary"] == 1000
