"""Smoke script for the converter API using the static rate provider.

Demonstrates:
 1. Startup loads rates and history.
 2. A valid conversion is recorded; a zero amount is not.
 3. Clearing history wipes the stored blob.

NOTE: This is a lightweight diagnostic and not a formal test.
"""

import os
import sys
import tempfile
from pprint import pprint

from fastapi.testclient import TestClient


def run():
    from currency_converter.core.config import Settings
    from currency_converter.main import create_app

    with tempfile.TemporaryDirectory() as d:
        settings = Settings(data_dir=d, exchange_rate_provider="static")
        out = {}
        with TestClient(create_app(settings_override=settings)) as client:
            out["rates"] = client.get("/rates").json()["last_updated"]
            out["valid"] = client.post("/convert", json={"amount": "10", "from": "USD", "to": "BRL"}).json()
            out["zero"] = client.post("/convert", json={"amount": "0", "from": "USD", "to": "BRL"}).json()
            out["history"] = client.get("/history").json()
            client.delete("/history")
            out["after_clear"] = client.get("/history").json()
        pprint(out)


if __name__ == "__main__":
    sys.path.append(os.getcwd())
    run()
