NEW_MEDICINE = {
    "id": "6",
    "name": "Cetirizine 10mg",
    "brand": "Cipla",
    "price": "2.40",
    "stock": 30,
    "requires_prescription": False,
    "category": "OTC",
    "description": "Allergy relief",
}


def test_pharmacist_crud(pharmacist):
    r = pharmacist.post("/api/inventory/medicines", json=NEW_MEDICINE)
    assert r.status_code == 201
    assert r.json()["id"] == "6"

    r = pharmacist.post("/api/inventory/medicines", json=NEW_MEDICINE)
    assert r.status_code == 409

    updated = dict(NEW_MEDICINE, stock=4)
    r = pharmacist.put("/api/inventory/medicines/6", json=updated)
    assert r.status_code == 200
    assert r.json()["low_stock"] is True

    r = pharmacist.delete("/api/inventory/medicines/6")
    assert r.status_code == 200
    assert pharmacist.get("/api/products/6").status_code == 404
    assert pharmacist.delete("/api/inventory/medicines/6").status_code == 404


def test_create_without_id_generates_one(pharmacist):
    payload = {k: v for k, v in NEW_MEDICINE.items() if k != "id"}
    r = pharmacist.post("/api/inventory/medicines", json=payload)
    assert r.status_code == 201
    assert r.json()["id"]


def test_update_missing_medicine(pharmacist):
    r = pharmacist.put("/api/inventory/medicines/404", json=NEW_MEDICINE)
    assert r.status_code == 404


def test_invalid_fields_are_rejected(pharmacist):
    assert pharmacist.post("/api/inventory/medicines",
                           json=dict(NEW_MEDICINE, price="-1")).status_code == 422
    assert pharmacist.post("/api/inventory/medicines",
                           json=dict(NEW_MEDICINE, stock=-2)).status_code == 422
    assert pharmacist.post("/api/inventory/medicines",
                           json=dict(NEW_MEDICINE, original_price="1.00")).status_code == 422


def test_patients_cannot_edit_catalog(patient, client):
    assert patient.post("/api/inventory/medicines", json=NEW_MEDICINE).status_code == 403
    assert patient.delete("/api/inventory/medicines/1").status_code == 403
    r = client.post("/api/inventory/medicines", json=NEW_MEDICINE)
    assert r.status_code == 401
