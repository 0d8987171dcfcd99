import streamlit as st
import pandas as pd
from datetime import datetime

from booking_api.client.api import APIError
from booking_api.client.state import (
    BUSINESS_TZ,
    flash,
    get_admin_session,
    get_client,
    pop_flash,
    sign_in,
    sign_out,
)

st.set_page_config(page_title="Appointments", page_icon="🗓️", layout="wide")

st.title("Appointments")

EDITABLE = ["name", "phone", "email", "service", "startAt", "notes"]


def local_time(iso_value: str) -> str:
    return datetime.fromisoformat(iso_value.replace("Z", "+00:00")).astimezone(BUSINESS_TZ).strftime("%m/%d/%Y, %I:%M %p")


def client_view():
    with st.form("lookup_form"):
        col1, col2 = st.columns([2, 1])
        last_name = col1.text_input("Last name", placeholder="Last name (e.g., Reyes)")
        last4 = col2.text_input("Last 4 of phone", max_chars=4)
        submitted = st.form_submit_button("Find", type="primary")

    if not submitted:
        return

    with st.spinner("Searching…"):
        try:
            bookings = get_client().lookup(last_name, "".join(ch for ch in last4 if ch.isdigit()))
        except APIError as e:
            st.error(f"Error: {e.error}")
            return

    if not bookings:
        st.info("No upcoming appointments found. Check spelling and last 4 digits.")
        return

    for b in bookings:
        with st.container(border=True):
            st.markdown(f"**{b['service']}** · #{b['id']}")
            st.write(local_time(b["startAt"]))
            if b.get("notes"):
                st.caption(f"Notes: {b['notes']}")


def to_frame(bookings) -> pd.DataFrame:
    df = pd.DataFrame(bookings, columns=["id", "status"] + EDITABLE)
    # Edited as naive local wall-clock time
    df["startAt"] = pd.to_datetime(df["startAt"], utc=True).dt.tz_convert(BUSINESS_TZ).dt.tz_localize(None)
    return df.set_index("id")


def to_payload(booking_id, row) -> dict:
    start = pd.Timestamp(row["startAt"]).tz_localize(BUSINESS_TZ).tz_convert("UTC")
    payload = {column: (None if pd.isna(row[column]) else row[column]) for column in EDITABLE + ["status"]}
    payload["id"] = int(booking_id)
    payload["startAt"] = start.isoformat()
    return payload


def login_form():
    with st.form("admin_login"):
        password = st.text_input("Admin password", type="password")
        submitted = st.form_submit_button("Sign in", type="primary")
    if submitted:
        try:
            sign_in(get_client().login(password))
        except APIError as e:
            st.error(e.error or "Login failed")
            return
        st.rerun()


def admin_view():
    session = get_admin_session()
    if session is None:
        login_form()
        return

    col1, _, col3 = st.columns([1, 4, 1])
    if col1.button("Refresh"):
        st.rerun()
    if col3.button("Sign out"):
        sign_out()
        st.rerun()

    message = pop_flash()
    if message:
        st.success(message)

    try:
        bookings = get_client().list_bookings(session)
    except APIError as e:
        if e.status == 401:
            sign_out()
            st.warning("Session expired, please sign in again.")
        else:
            st.error(e.error)
        return

    if not bookings:
        st.info("No bookings yet.")
        return

    original = to_frame(bookings)
    edited = st.data_editor(
        original,
        use_container_width=True,
        disabled=["status"],
        column_config={
            "startAt": st.column_config.DatetimeColumn("Start", format="MM/DD/YYYY hh:mm a"),
            "name": "Name",
            "phone": "Phone",
            "email": "Email",
            "service": "Service",
            "notes": "Notes",
            "status": "Status",
        },
        key="bookings_editor",
    )

    if st.button("Save", type="primary"):
        changed = [booking_id for booking_id in edited.index
                   if not edited.loc[booking_id].equals(original.loc[booking_id])]
        for booking_id in changed:
            try:
                get_client().update_booking(session, to_payload(booking_id, edited.loc[booking_id]))
            except APIError as e:
                st.error(f"#{booking_id}: {e.error}")
                return
        flash(f"Saved {len(changed)} booking(s).")
        st.rerun()


client_tab, admin_tab = st.tabs(["Client", "Admin"])
with client_tab:
    client_view()
with admin_tab:
    admin_view()
