import pytest
from sqlmodel import select

from app.db.models import Booking, MedicalRecord
from conftest import add_booking, today_at


@pytest.mark.asyncio
async def test_patient_crud(client, cs_user, auth_headers):
    cs = auth_headers(cs_user)

    created = await client.post("/api/v1/patients/", headers=cs, json={
        "name": "Andi",
        "gender": "male",
        "date_of_birth": "1978-03-12",
        "phone_number": "0822",
        "address": "Jl. Diponegoro 9",
    })
    assert created.status_code == 201
    patient_id = created.json()["id"]

    updated = await client.patch(f"/api/v1/patients/{patient_id}", headers=cs, json={"phone_number": "0899"})
    assert updated.status_code == 200
    assert updated.json()["phone_number"] == "0899"
    assert updated.json()["name"] == "Andi"

    found = await client.get("/api/v1/patients/", params={"search": "and"}, headers=cs)
    assert [p["id"] for p in found.json()] == [patient_id]

    deleted = await client.delete(f"/api/v1/patients/{patient_id}", headers=cs)
    assert deleted.status_code == 204
    assert (await client.get(f"/api/v1/patients/{patient_id}", headers=cs)).status_code == 404


@pytest.mark.asyncio
async def test_patient_requires_known_gender(client, cs_user, auth_headers):
    res = await client.post("/api/v1/patients/", headers=auth_headers(cs_user), json={
        "name": "X",
        "gender": "other",
        "date_of_birth": "2000-01-01",
        "phone_number": "1",
        "address": "A",
    })
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_delete_patient_removes_bookings_and_records(client, session, session_factory, patient, doctor, cs_user, auth_headers):
    booking = await add_booking(session, patient, doctor, today_at(9))
    finish = await client.post(
        f"/api/v1/bookings/{booking.id}/finish", headers=auth_headers(doctor), json={"diagnosis": "flu"}
    )
    assert finish.status_code == 200

    res = await client.delete(f"/api/v1/patients/{patient.id}", headers=auth_headers(cs_user))
    assert res.status_code == 204

    async with session_factory() as fresh:
        assert (await fresh.execute(select(Booking))).scalars().all() == []
        assert (await fresh.execute(select(MedicalRecord))).scalars().all() == []


@pytest.mark.asyncio
async def test_patient_search_treats_wildcards_literally(client, patient, cs_user, auth_headers):
    cs = auth_headers(cs_user)
    created = await client.post("/api/v1/patients/", headers=cs, json={
        "name": "Dewi 50% Off_Ward",
        "gender": "female",
        "date_of_birth": "1995-07-07",
        "phone_number": "0844",
        "address": "Jl. Thamrin 2",
    })
    dewi_id = created.json()["id"]

    for search, expected in (("%", [dewi_id]), ("_", [dewi_id]), ("Off_W", [dewi_id]), ("S_ti", []), ("s%i", [])):
        res = await client.get("/api/v1/patients/", params={"search": search}, headers=cs)
        assert res.status_code == 200
        assert [p["id"] for p in res.json()] == expected, search

    res = await client.get("/api/v1/patients/", params={"search": "SIT"}, headers=cs)
    assert [p["id"] for p in res.json()] == [str(patient.id)]
