# tests/integration/utils/helpers.py
import json

import requests
from gridwar.models.scenario import Scenario


# ---------- HTTP helpers (show server error bodies) ----------
def _post(url: str, payload: dict | None = None, *, timeout=5) -> dict:
    r = requests.post(url, json=payload, timeout=timeout)
    if r.status_code >= 400:
        try:
            body = r.json()
        except ValueError:
            body = r.text
        raise requests.HTTPError(
            f"{r.status_code} {r.reason} for {url}\n"
            f"Payload:\n{json.dumps(payload, indent=2)}\n"
            f"Response:\n{body}",
            response=r,
        )
    return r.json()


def _get(url: str, *, timeout=5, **params) -> dict:
    r = requests.get(url, params=params or None, timeout=timeout)
    r.raise_for_status()
    return r.json()


def _create_session(base_url: str, scenario: Scenario | None = None) -> tuple[str, dict]:
    body = {}
    if scenario is not None:
        body["scenario"] = json.loads(scenario.model_dump_json())
    sess = _post(f"{base_url}/sessions", body)
    return sess["id"], sess


def _apply(base_url: str, sid: str, action: dict) -> dict:
    return _post(f"{base_url}/sessions/{sid}/action", {"action": action})


def _evaluate(base_url: str, sid: str, action: dict) -> dict:
    return _post(f"{base_url}/sessions/{sid}/evaluate", {"action": action})


def _unit(sess_json: dict, uid: str) -> dict | None:
    return sess_json["game"]["units"].get(uid)
