from datetime import date, datetime, time

import pandas as pd
import streamlit as st

from api import call, get_context
from attendance_client.core.exceptions import ValidationError
from attendance_client.formatting import format_datetime, format_time
from attendance_client.schemas.requests import LeaveType
from attendance_client.services.request_service import can_withdraw
from role_guard import setup_role_access

setup_role_access(__file__)

ctx = get_context()
tz = ctx.settings.timezone
service = ctx.request_service
user = ctx.session.user

st.title("📅 Leave / Time Correction Requests")


def show_field_errors(key):
    for field, message in st.session_state.get(key, {}).items():
        st.caption(f"❌ {field}: {message}")


def submit(key, fn, **kwargs):
    try:
        result = fn(**kwargs)
    except ValidationError as e:
        # keep the form as typed, show the problems next to it
        st.session_state[key] = e.errors or {"form": e.message}
        return None
    st.session_state[key] = {}
    return result


tab_leave, tab_fix, tab_mine = st.tabs(["🌴 Leave", "🕘 Time correction", "📄 My requests"])

# ---------------- Leave ----------------
with tab_leave:
    with st.form("leave_form"):
        leave_type = st.selectbox("Type", [t.value for t in LeaveType])
        c1, c2 = st.columns(2)
        start_d = c1.date_input("Start date", value=date.today())
        end_d = c2.date_input("End date", value=date.today())
        reason = st.text_area("Reason")
        submitted = st.form_submit_button("Submit leave request", type="primary")

    if submitted:
        created = call(
            submit, "leave_errors", service.create_leave_request,
            type=leave_type, start_date=start_d, end_date=end_d, reason=reason,
        )
        if created:
            st.success(f"Leave request submitted ({created.duration_days} day(s)).")
    show_field_errors("leave_errors")

# ---------------- Time correction ----------------
with tab_fix:
    with st.form("fix_form"):
        fix_date = st.date_input("Date", value=date.today())
        c1, c2 = st.columns(2)
        fix_in = c1.time_input("Correct clock-in", value=time(9, 0))
        fix_out = c2.time_input("Correct clock-out", value=time(18, 0))
        send_in = c1.checkbox("Correct clock-in", value=True)
        send_out = c2.checkbox("Correct clock-out", value=True)
        fix_reason = st.text_area("Reason", key="fix_reason")
        fix_submitted = st.form_submit_button("Submit correction", type="primary")

    if fix_submitted:
        created = call(
            submit, "fix_errors", service.create_time_modification,
            date=fix_date,
            reason=fix_reason,
            requested_clock_in=datetime.combine(fix_date, fix_in) if send_in else None,
            requested_clock_out=datetime.combine(fix_date, fix_out) if send_out else None,
        )
        if created:
            st.success("Time correction request submitted.")
    show_field_errors("fix_errors")

# ---------------- My requests ----------------
with tab_mine:
    leave_requests = call(service.get_leave_requests) or []
    fix_requests = call(service.get_time_modification_requests) or []

    st.subheader("Leave")
    if not leave_requests:
        st.info("No leave requests yet.")
    for req in leave_requests:
        with st.container(border=True):
            cols = st.columns([2, 3, 3, 2, 1])
            cols[0].markdown(f"**{req.type.value.title()}**")
            cols[1].write(f"{req.start_date} → {req.end_date} ({req.duration_days}d)")
            cols[2].write(req.reason)
            cols[3].write(req.status.value)
            # terminal requests never get a withdraw control
            if can_withdraw(req, user) and cols[4].button("Withdraw", key=f"wd_leave_{req.id}"):
                if call(service.withdraw, req, user):
                    st.rerun()

    st.subheader("Time corrections")
    if not fix_requests:
        st.info("No time correction requests yet.")
    else:
        df = pd.DataFrame([
            {
                "Date": r.date.isoformat(),
                "Requested in": format_time(r.requested_clock_in, tz),
                "Requested out": format_time(r.requested_clock_out, tz),
                "Reason": r.reason,
                "Status": r.status.value,
                "Submitted": format_datetime(r.created_at, tz),
            }
            for r in fix_requests
        ])
        st.dataframe(df, use_container_width=True, hide_index=True)

        for req in fix_requests:
            if can_withdraw(req, user) and st.button(f"Withdraw correction for {req.date}", key=f"wd_fix_{req.id}"):
                if call(service.withdraw, req, user):
                    st.rerun()
