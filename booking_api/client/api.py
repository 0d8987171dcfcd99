import os
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests
from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_URL = os.getenv("BOOKING_API_URL", "http://localhost:5001")


class APIError(Exception):
    def __init__(self, status: Optional[int], error: str):
        super().__init__(error)
        self.status = status
        self.error = error


@dataclass
class AdminSession:
    """Admin credential obtained at login and passed into every protected call."""
    token: str

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class BookingAPIClient:
    def __init__(self, base_url: str = DEFAULT_API_URL, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = requests.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise APIError(None, str(e)) from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.status_code >= 400:
            error = data.get("message") or data.get("error") or f"HTTP {response.status_code}"
            raise APIError(response.status_code, error)
        return data

    def create_booking(self, name: str, service: str, start_at: datetime, phone: Optional[str] = None,
                       email: Optional[str] = None, notes: Optional[str] = None) -> int:
        payload = {
            "name": name,
            "email": email or None,
            "phone": phone or None,
            "service": service,
            "notes": notes or None,
            "startAt": start_at.isoformat(),
        }
        return self._request("POST", "/api/bookings", json=payload)["id"]

    def lookup(self, last_name: str, last4: str) -> List[Dict[str, Any]]:
        data = self._request("GET", "/api/bookings/public", params={"lastName": last_name, "last4": last4})
        return data.get("bookings") or []

    def login(self, password: str) -> AdminSession:
        data = self._request("POST", "/api/admin/login", json={"password": password})
        return AdminSession(token=data["token"])

    def list_bookings(self, session: AdminSession) -> List[Dict[str, Any]]:
        data = self._request("GET", "/api/bookings", headers=session.headers)
        return sorted(data.get("bookings") or [], key=lambda b: b["startAt"])

    def update_booking(self, session: AdminSession, booking: Dict[str, Any]) -> int:
        payload = {
            "name": booking.get("name"),
            "email": booking.get("email"),
            "phone": booking.get("phone"),
            "service": booking.get("service"),
            "notes": booking.get("notes"),
            "startAt": booking.get("startAt"),
            "status": booking.get("status") or "Pending",
        }
        data = self._request("PUT", f"/api/bookings/{booking['id']}", json=payload, headers=session.headers)
        return data["id"]
