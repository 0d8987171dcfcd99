import streamlit as st

from booking_api.client.api import APIError
from booking_api.client.state import get_client, sign_in

st.set_page_config(page_title="Admin Login", page_icon="🔑", layout="centered")

st.title("Admin Login")

with st.form("login_form"):
    password = st.text_input("Admin password", type="password")
    submitted = st.form_submit_button("Sign in", type="primary")

if submitted:
    try:
        sign_in(get_client().login(password))
    except APIError as e:
        st.error(e.error or "Login failed")
    else:
        st.switch_page("pages/2_Appointments.py")
