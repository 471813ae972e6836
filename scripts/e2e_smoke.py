#!/usr/bin/env python3
"""End-to-end smoke for a running RiskBoard API.

Walks the assess → read → aggregate → delete flow and fails fast on regressions.
"""

from __future__ import annotations

import os
import sys

import httpx

BASE_URL = os.environ.get("RISKBOARD_URL", "http://127.0.0.1:5000")
TIMEOUT = 10.0


def expect(condition: bool, message: str) -> None:
    if not condition:
        raise AssertionError(message)


def call(client: httpx.Client, method: str, path: str, expected: int = 200, **kwargs) -> httpx.Response:
    resp = client.request(method, f"{BASE_URL}{path}", **kwargs)
    expect(
        resp.status_code == expected,
        f"{method} {path} -> {resp.status_code} != {expected}; body={resp.text[:500]}",
    )
    return resp


def main() -> int:
    with httpx.Client(timeout=TIMEOUT) as client:
        # 1) Health
        health = call(client, "GET", "/health").json()
        expect(health.get("status") == "ok", "health status is not ok")

        # 2) Validation rejects bad input
        bad = call(client, "POST", "/assess-risk", expected=400, json={"asset": "X", "threat": "Y", "likelihood": 9, "impact": 1})
        expect("error" in bad.json(), "validation error body has no 'error'")

        # 3) Create and read back
        created = call(
            client,
            "POST",
            "/assess-risk",
            expected=201,
            json={"asset": "Smoke Asset", "threat": "Smoke Threat", "likelihood": 4, "impact": 5},
        ).json()
        expect(created["score"] == 20, "score is not 20")
        expect(created["level"] == "Critical", "level is not Critical")
        risk_id = int(created["id"])

        fetched = call(client, "GET", f"/risks/{risk_id}").json()
        expect(
            fetched["mitigation_hint"] == "Immediate mitigation required + executive reporting",
            "unexpected mitigation hint",
        )

        # 4) Listing, filtering and aggregates
        critical = call(client, "GET", "/risks", params={"level": "Critical"}).json()
        expect(any(r["id"] == risk_id for r in critical), "created risk missing from Critical filter")

        stats = call(client, "GET", "/stats").json()
        expect(stats["total_risks"] >= 1, "stats total is zero")

        heatmap = call(client, "GET", "/heatmap").json()
        expect("Smoke Asset" in heatmap.get("4-5", {}).get("assets", []), "heatmap cell 4-5 missing asset")

        # 5) Delete, then delete again
        call(client, "DELETE", f"/risks/{risk_id}")
        call(client, "DELETE", f"/risks/{risk_id}", expected=404)
        call(client, "GET", f"/risks/{risk_id}", expected=404)

    print("✓ RiskBoard smoke passed")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except AssertionError as exc:
        print(f"✗ {exc}", file=sys.stderr)
        sys.exit(1)
