import streamlit as st
from datetime import date

from booking_api.client.catalog import SERVICES

# Page Config
st.set_page_config(
    page_title="ericfadezz • Mobile Barber",
    page_icon="💈",
    layout="wide"
)

# Header
st.caption("Mobile Barber • House Calls • Clean Cuts")
st.title("Fresh cuts on your time")
st.write("Book a premium house-call cut in seconds. Transparent pricing, fast confirmations.")

col1, col2, col3 = st.columns(3)
with col1:
    st.page_link("pages/1_Book.py", label="Book an Appointment", icon="📅")
with col2:
    st.link_button("@eric.fadezz", "https://instagram.com/eric.fadezz")
with col3:
    st.link_button("(530) 601-3529", "tel:15306013529")

# Services
st.subheader("Services")
featured = [s for s in SERVICES if s.featured]
for column, service in zip(st.columns(len(featured)), featured):
    with column:
        with st.container(border=True):
            st.markdown(f"**{service.label}** · ${service.price}")
            st.write(service.description)
            st.caption(f"{service.duration_min} min")
            st.page_link("pages/1_Book.py", label="Book")

st.caption("Prices may vary by request. Travel area local only.")

# Footer
st.markdown("---")
st.caption(f"© {date.today().year} ericfadezz · Mobile Barber • booking@ericfadezz.com")
