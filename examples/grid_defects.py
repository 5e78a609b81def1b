"""Example script that places a grid of defects through the HTTP API."""
from __future__ import annotations

import requests

BASE_URL = "http://localhost:8000"


def build_grid(cols: int = 5, rows: int = 3, pitch: float = 30.0):
    x0 = -pitch * (cols - 1) / 2.0
    y0 = -pitch * (rows - 1) / 2.0
    return [(x0 + c * pitch, y0 + r * pitch) for r in range(rows) for c in range(cols)]


def main() -> None:
    res = requests.delete(f"{BASE_URL}/api/defects", timeout=5)
    res.raise_for_status()
    for x, y in build_grid():
        res = requests.post(f"{BASE_URL}/api/defects", json={"x": x, "y": y}, timeout=5)
        res.raise_for_status()
    res = requests.get(f"{BASE_URL}/api/status", timeout=5)
    res.raise_for_status()
    print(res.json())


if __name__ == "__main__":
    main()
