import streamlit as st
from datetime import datetime, time, timedelta

from booking_api.client.api import APIError
from booking_api.client.calendar_links import build_google_calendar_url, build_ics
from booking_api.client.catalog import SERVICES, location_for, service_label
from booking_api.client.state import BUSINESS_TZ, CALENDAR_DOMAIN, get_client

st.set_page_config(page_title="Book an Appointment", page_icon="📅", layout="centered")

st.title("Book an Appointment")
st.write("Pick a service and time. You'll get instant confirmation.")

with st.form("booking_form", clear_on_submit=True):
    service = st.radio(
        "Service",
        SERVICES,
        format_func=lambda s: f"{s.label} · ${s.price} • {s.duration_min}m",
    )
    col1, col2 = st.columns(2)
    name = col1.text_input("Name", placeholder="Your name")
    phone = col2.text_input("Phone", placeholder="(555) 123-4567")
    email = col1.text_input("Email", placeholder="you@email.com")
    day = col2.date_input("Date", min_value=datetime.now(BUSINESS_TZ).date())
    start_time = col2.time_input("Time", value=time(10, 0), step=timedelta(minutes=15))
    notes = st.text_area("Notes (optional)", placeholder="Anything I should know? Gate code, style reference, etc.")
    submitted = st.form_submit_button("Confirm Booking", type="primary")

if submitted:
    if len(name.strip()) < 2:
        st.error("Name is required")
        st.stop()

    start = datetime.combine(day, start_time, tzinfo=BUSINESS_TZ)
    end = start + timedelta(minutes=service.duration_min)

    try:
        booking_id = get_client().create_booking(
            name=name.strip(),
            service=service_label(service),
            start_at=start,
            phone=phone,
            email=email,
            notes=notes,
        )
    except APIError as e:
        st.error(f"Booking failed. Try a different time or check your connection. ({e.error})")
        st.stop()

    st.success(f"Booked #{booking_id}. See you soon!")

    title = f"{service.label} with Eric"
    description = f"Notes: {notes}" if notes else ""
    location = location_for(service)

    ics = build_ics(booking_id, title, start, end, description=description,
                    location=location, domain=CALENDAR_DOMAIN)
    col1, col2 = st.columns(2)
    col1.download_button(
        "Add to Apple/Outlook (ICS)",
        data=ics,
        file_name="booking.ics",
        mime="text/calendar",
    )
    col2.link_button(
        "Add to Google Calendar",
        build_google_calendar_url(title, start, end, details=description, location=location),
    )
