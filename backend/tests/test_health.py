def test_health_ok(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "ok"
    assert body["db"] is True
    assert "assistant" in body


def test_login_logout_keeps_cart(client):
    r = client.post("/api/auth/login", json={"email": "sam@mediswift.test", "role": "ADMIN"})
    user = r.json()["user"]
    assert user["name"] == "sam"
    assert user["role"] == "ADMIN"
    client.post("/api/cart/items", json={"medicine_id": "1"})
    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").json()["user"] is None
    assert client.get("/api/cart").json()["total_quantity"] == 1
