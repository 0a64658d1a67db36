from smartfill.web.api import app


def test_score_endpoint():
    client = app.test_client()
    resp = client.post("/score", json={"password": "abcdefgh"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["score"] == 2
    assert data["label"] == "Weak"
    assert data["feedback"] == [
        "Add uppercase letters",
        "Add numbers",
        "Add special characters (!@#$%)",
    ]

def test_score_endpoint_missing_body():
    client = app.test_client()
    resp = client.post("/score")
    assert resp.status_code == 200
    assert resp.get_json() == {"score": 0, "feedback": [], "label": ""}

def test_score_endpoint_rejects_non_string():
    client = app.test_client()
    resp = client.post("/score", json={"password": 123})
    assert resp.status_code == 400
