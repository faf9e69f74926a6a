PROBLEM_KEYS = (
    "type",
    "title",
    "status",
    "detail",
    "correlation_id",
    "code",
    "message",
    "details",
)


def test_rfc7807_not_found(client):
    r = client.get("/__nope__")
    assert r.status_code == 404
    body = r.json()
    for k in PROBLEM_KEYS:
        assert k in body
    assert body["code"] == "HTTP_ERROR"


def test_rfc7807_validation_error(client):
    r = client.post(
        "/api/v1/auth/register",
        json={"name": "", "email": "x@example.com", "password": "secret123"},
    )
    assert r.status_code == 422
    body = r.json()
    for k in PROBLEM_KEYS:
        assert k in body
    assert body["code"] == "VALIDATION_ERROR"


def test_malformed_identifier_rejected(client):
    r = client.get("/api/v1/questions/not-a-number")
    assert r.status_code == 422
    assert r.json()["code"] == "VALIDATION_ERROR"


def test_correlation_id_echoed(client):
    r = client.get("/api/v1/questions/999", headers={"X-Correlation-ID": "abc-123"})
    assert r.status_code == 404
    assert r.headers["X-Correlation-ID"] == "abc-123"
    assert r.json()["correlation_id"] == "abc-123"
    assert r.json()["code"] == "NOT_FOUND"


def test_missing_token_is_unauthorized(client):
    r = client.post("/api/v1/questions", json={"title": "t", "desc": "d"})
    assert r.status_code == 401
    body = r.json()
    assert body["code"] == "UNAUTHORIZED"
    assert r.headers["content-type"].startswith("application/problem+json")


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/healthz").json() == {"status": "ok"}
