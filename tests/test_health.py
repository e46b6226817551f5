# tests/test_health.py
from typing import Any


def test_health(client: Any) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_root_describes_api(client: Any) -> None:
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["name"] == "Gammy Feed"
