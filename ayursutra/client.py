from __future__ import annotations

from typing import Any
from urllib.parse import quote

import requests

from ayursutra.config import settings

TIMEOUT = 10


class ApiNotFound(LookupError):
    """404 from the API; the message is the server's `detail`."""


def _detail(r: requests.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.text
    return str(body.get("detail", body)) if isinstance(body, dict) else str(body)


def _check(r: requests.Response) -> Any:
    if r.status_code == 404:
        raise ApiNotFound(_detail(r))
    r.raise_for_status()
    return r.json()


def api_get(path: str, params: dict | None = None, base: str | None = None) -> Any:
    r = requests.get(f"{base or settings.api_base}{path}", params=params, timeout=TIMEOUT)
    return _check(r)


def api_post(path: str, payload: dict, base: str | None = None) -> Any:
    r = requests.post(f"{base or settings.api_base}{path}", json=payload, timeout=TIMEOUT)
    return _check(r)


def api_put(path: str, payload: dict | None = None, base: str | None = None) -> Any:
    r = requests.put(f"{base or settings.api_base}{path}", json=payload, timeout=TIMEOUT)
    return _check(r)


def patient_history_path(name: str) -> str:
    # "/" in a name must be encoded too
    return f"/api/patients/{quote(name, safe='')}/history"
