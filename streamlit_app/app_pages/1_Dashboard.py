from datetime import date

import streamlit as st

from api import call, get_context
from attendance_client.formatting import format_time
from attendance_client.schemas.requests import RequestStatus
from attendance_client.working_hours import compute_working_hours
from role_guard import setup_role_access

setup_role_access(__file__)

ctx = get_context()
tz = ctx.settings.timezone
user = ctx.session.user

st.markdown(f"# Welcome, {user.name}")
st.caption(f"{user.department or ''}")
st.divider()

# --- TODAY ---
record = call(ctx.clock_actions.refresh_today)
hours = compute_working_hours(record)

c1, c2, c3 = st.columns(3)
c1.metric("Status", ctx.attendance.get_current_status().value.replace("_", " ").title())
c2.metric("Clock in", format_time(record.clock_in, tz) if record else "-")
c3.metric("Worked today", hours.display)

# --- THIS MONTH ---
today = date.today()
stats = call(ctx.time_service.get_statistics, today.replace(day=1), today)
if stats:
    st.subheader("This month")
    s1, s2, s3 = st.columns(3)
    s1.metric("Working days", stats.working_days)
    s2.metric("Total hours", f"{stats.total_hours:.1f}h")
    s3.metric("Average per day", f"{stats.average_hours:.1f}h")

# --- OPEN REQUESTS ---
pending_leave = call(ctx.request_service.get_leave_requests, RequestStatus.PENDING) or []
pending_fix = call(ctx.request_service.get_time_modification_requests, RequestStatus.PENDING) or []
st.subheader("Pending requests")
st.write(f"{len(pending_leave)} leave, {len(pending_fix)} time correction")
