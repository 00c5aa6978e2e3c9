from datetime import datetime

import streamlit as st

from api import call, get_context
from attendance_client.attendance_state import AttendancePhase
from attendance_client.formatting import format_time
from attendance_client.schemas.time_record import Location
from attendance_client.working_hours import compute_working_hours
from role_guard import setup_role_access

setup_role_access(__file__)

ctx = get_context()
tz = ctx.settings.timezone
state = ctx.attendance
actions = ctx.clock_actions

STATUS_LABELS = {
    AttendancePhase.CLOCKED_OUT: "⚪ Not working",
    AttendancePhase.CLOCKED_IN: "🟢 Working",
    AttendancePhase.ON_BREAK: "🟡 On break",
}

st.title("⏱️ Clock In / Out")
st.caption(f"Current time: {datetime.now().strftime('%H:%M:%S')}")

# The server's record is the only truth; reload before rendering
call(actions.refresh_today)
record = state.today_record

with st.container(border=True):
    st.subheader(STATUS_LABELS[state.get_current_status()])
    cols = st.columns(5)
    cols[0].markdown(f"**Clock In**\n\n{format_time(record.clock_in, tz) if record else '-'}")
    cols[1].markdown(f"**Break Start**\n\n{format_time(record.break_start, tz) if record else '-'}")
    cols[2].markdown(f"**Break End**\n\n{format_time(record.break_end, tz) if record else '-'}")
    cols[3].markdown(f"**Clock Out**\n\n{format_time(record.clock_out, tz) if record else '-'}")
    cols[4].markdown(f"**Worked**\n\n{compute_working_hours(record).display}")
    if record and record.status:
        st.caption(f"Status: {record.status.value.replace('_', ' ').title()}")

# --- OPTIONAL LOCATION ---
location = None
with st.expander("Attach location"):
    use_location = st.checkbox("Send my location with clock in/out")
    lat = st.number_input("Latitude", value=0.0, format="%.6f", disabled=not use_location)
    lng = st.number_input("Longitude", value=0.0, format="%.6f", disabled=not use_location)
    if use_location:
        location = Location(lat=lat, lng=lng)

st.write("")

b1, b2, b3, b4 = st.columns(4)
clicked = None
with b1:
    if st.button("Clock in", type="primary", use_container_width=True, disabled=not state.can_clock_in()):
        clicked = lambda: actions.clock_in(location)
with b2:
    if st.button("Start break", use_container_width=True, disabled=not state.can_start_break()):
        clicked = actions.start_break
with b3:
    if st.button("End break", use_container_width=True, disabled=not state.can_end_break()):
        clicked = actions.end_break
with b4:
    if st.button("Clock out", type="primary", use_container_width=True, disabled=not state.can_clock_out()):
        clicked = lambda: actions.clock_out(location)

if clicked:
    with st.spinner("Sending..."):
        result = call(clicked, on_business_error=actions.refresh_today)
    if result:
        st.success("Saved.")
        st.rerun()
