import os
from typing import Optional
from zoneinfo import ZoneInfo

import streamlit as st

from booking_api.client.api import AdminSession, BookingAPIClient

SESSION_KEY = "admin_session"
FLASH_KEY = "flash_message"

BUSINESS_TZ = ZoneInfo(os.getenv("BUSINESS_TIMEZONE", "America/Los_Angeles"))
CALENDAR_DOMAIN = os.getenv("CALENDAR_DOMAIN", "ericfadezz.local")


@st.cache_resource
def get_client() -> BookingAPIClient:
    return BookingAPIClient()


def get_admin_session() -> Optional[AdminSession]:
    return st.session_state.get(SESSION_KEY)


def sign_in(session: AdminSession):
    st.session_state[SESSION_KEY] = session


def sign_out():
    st.session_state.pop(SESSION_KEY, None)


def flash(message: str):
    """Keep a message across st.rerun() so the next run can show it."""
    st.session_state[FLASH_KEY] = message


def pop_flash() -> Optional[str]:
    return st.session_state.pop(FLASH_KEY, None)
