"""
End-to-end tests through the FastAPI app (TestClient runs the startup load).
"""

from currency_converter.core.errors import FetchError
from currency_converter.db.storage import KeyValueStore


def test_root_and_health(client):
    assert client.get("/").json()["message"] == "Currency Converter API"
    body = client.get("/health").json()
    assert body == {"status": "ok", "rates_loaded": True, "history_size": 0}


def test_rates_snapshot(client):
    body = client.get("/rates").json()
    assert body["base"] == "USD"
    assert body["rates"]["BRL"] == 5.0
    assert body["last_updated"]


def test_currencies(client):
    body = client.get("/currencies").json()
    assert {"code": "BRL", "name": "Real Brasileiro"} in body
    assert [c["code"] for c in body] == ["USD", "BRL", "EUR"]


def test_scenario_usd_to_brl_is_recorded(client):
    resp = client.post("/convert", json={"amount": "10", "from": "USD", "to": "BRL"})
    assert resp.status_code == 200
    assert resp.json() == {
        "amount": "10",
        "from": "USD",
        "to": "BRL",
        "result": "50.00",
        "status": "ok",
        "recorded": True,
    }
    history = client.get("/history").json()
    assert len(history) == 1
    assert (history[0]["amount"], history[0]["from"], history[0]["to"], history[0]["result"]) == (
        "10",
        "USD",
        "BRL",
        "50.00",
    )


def test_scenario_zero_amount_not_recorded(client):
    resp = client.post("/convert", json={"amount": "0", "from": "USD", "to": "BRL"})
    assert resp.json()["result"] == "0.00"
    assert resp.json()["recorded"] is False
    assert client.get("/history").json() == []


def test_scenario_missing_rate_is_error(make_client):
    client = make_client(rates={"USD": 1.0, "EUR": 0.5})
    resp = client.post("/convert", json={"amount": "10", "from": "USD", "to": "BRL"})
    assert resp.json()["result"] == "Erro"
    assert resp.json()["status"] == "unavailable"
    assert client.get("/history").json() == []


def test_scenario_eleven_conversions_keep_ten(client):
    for n in range(1, 12):
        client.post("/convert", json={"amount": str(n), "from": "USD", "to": "BRL"})
    history = client.get("/history").json()
    assert len(history) == 10
    assert [h["amount"] for h in history] == [str(n) for n in range(11, 1, -1)]


def test_scenario_clear_wipes_memory_and_storage(client, settings):
    client.post("/convert", json={"amount": "10", "from": "USD", "to": "BRL"})
    assert client.delete("/history").status_code == 204
    assert client.get("/history").json() == []
    store = KeyValueStore(settings.db_path)
    assert store.get_item(settings.history_storage_key) is None


def test_history_survives_restart(make_client):
    first = make_client()
    first.post("/convert", json={"amount": "3", "from": "BRL", "to": "USD"})
    second = make_client()
    assert [h["result"] for h in second.get("/history").json()] == ["0.60"]


def test_get_convert_does_not_record(client):
    resp = client.get("/convert", params={"amount": "10", "from": "USD", "to": "EUR"})
    assert resp.json()["result"] == "5.00"
    assert resp.json()["recorded"] is False
    assert client.get("/history").json() == []


def test_get_convert_invalid_amount(client):
    resp = client.get("/convert", params={"amount": "abc", "from": "USD", "to": "BRL"})
    assert resp.json()["result"] == "0.00"
    assert resp.json()["status"] == "empty"


def test_post_history_records_displayed_result(client):
    resp = client.post("/history", json={"amount": "10", "from": "USD", "to": "BRL", "result": "50.00"})
    assert resp.status_code == 201
    assert resp.json()[0]["result"] == "50.00"


def test_post_history_rejects_markers(client):
    for result in ("Erro", "0.00", "0", "0.000", "-5.00", "1e3"):
        resp = client.post("/history", json={"amount": "10", "from": "USD", "to": "BRL", "result": result})
        assert resp.status_code == 400
        assert resp.json()["error"] == "not_recordable"
    assert client.get("/history").json() == []


def test_first_load_failure_surfaces(make_client, fake_provider):
    client = make_client(provider=fake_provider(FetchError("offline")))
    resp = client.get("/rates")
    assert resp.status_code == 503
    assert resp.json()["error"] == "rates_unavailable"
    assert client.get("/health").json()["status"] == "degraded"
    assert client.post("/convert", json={"amount": "10"}).json()["result"] == "Erro"


def test_refresh_failure_keeps_rates(make_client, fake_provider):
    client = make_client(provider=fake_provider({"USD": 1.0, "BRL": 5.0}, FetchError("timeout")))
    resp = client.post("/rates/refresh")
    assert resp.status_code == 502
    assert resp.json()["error"] == "fetch_error"
    assert client.get("/rates").json()["rates"]["BRL"] == 5.0
    assert client.get("/convert", params={"amount": "1", "from": "USD", "to": "BRL"}).json()["result"] == "5.00"


def test_refresh_success_replaces_rates(make_client, fake_provider):
    client = make_client(provider=fake_provider({"USD": 1.0, "BRL": 5.0}, {"USD": 1.0, "BRL": 5.5}))
    assert client.post("/rates/refresh").json()["rates"]["BRL"] == 5.5


def test_validation_and_not_found(client):
    resp = client.post("/convert", json={"amount": "10", "from": "US", "to": "BRL"})
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_request_id_header(client):
    resp = client.get("/health", headers={"x-request-id": "abc123"})
    assert resp.headers["x-request-id"] == "abc123"
