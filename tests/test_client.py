"""Tests for the dashboard HTTP client."""
from unittest.mock import Mock, patch

import pytest
import requests

from ayursutra.client import ApiNotFound, api_get, api_post, api_put, patient_history_path


def _response(status_code: int, body=None):
    r = Mock()
    r.status_code = status_code
    r.json.return_value = body
    r.text = str(body)
    if status_code >= 400:
        r.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    else:
        r.raise_for_status.return_value = None
    return r


def test_get_returns_json():
    with patch("ayursutra.client.requests.get", return_value=_response(200, [{"id": 1}])) as get:
        assert api_get("/api/therapies", params={"category": "Detox Program"}, base="http://api") == [{"id": 1}]
    get.assert_called_once_with("http://api/api/therapies", params={"category": "Detox Program"}, timeout=10)


def test_get_404_raises_not_found_with_detail():
    with patch("ayursutra.client.requests.get", return_value=_response(404, {"detail": "Booking not found"})):
        with pytest.raises(ApiNotFound, match="Booking not found"):
            api_get("/api/bookings/9", base="http://api")


def test_post_sends_json_body():
    payload = {"patientName": "Asha Rao", "therapyId": 1}
    with patch("ayursutra.client.requests.post", return_value=_response(200, {"id": 5})) as post:
        assert api_post("/api/bookings", payload, base="http://api") == {"id": 5}
    post.assert_called_once_with("http://api/api/bookings", json=payload, timeout=10)


def test_put_server_error_raises_http_error():
    with patch("ayursutra.client.requests.put", return_value=_response(400, {"detail": "Day 9 is outside the course (0..3)."})):
        with pytest.raises(requests.HTTPError):
            api_put("/api/bookings/4/progress", {"progress": "completed", "day": 9}, base="http://api")


def test_put_without_body():
    with patch("ayursutra.client.requests.put", return_value=_response(200, {"id": 2, "read": True})) as put:
        assert api_put("/api/notifications/2/read", base="http://api")["read"] is True
    put.assert_called_once_with("http://api/api/notifications/2/read", json=None, timeout=10)


def test_patient_history_path_encodes_slash_and_spaces():
    assert patient_history_path("Asha Rao") == "/api/patients/Asha%20Rao/history"
    assert patient_history_path("A/B") == "/api/patients/A%2FB/history"
