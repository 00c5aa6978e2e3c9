import streamlit as st

from api import call, get_context
from attendance_client.formatting import format_datetime, format_time
from attendance_client.schemas.requests import RequestStatus
from attendance_client.services.request_service import can_decide
from role_guard import setup_role_access

setup_role_access(__file__)

ctx = get_context()
service = ctx.request_service
user = ctx.session.user
tz = ctx.settings.timezone

st.title("📝 Approval Queue")

status_filter = st.selectbox("Show", ["PENDING", "APPROVED", "REJECTED", "All"], index=0)
status = None if status_filter == "All" else RequestStatus(status_filter)

if st.session_state.get("queue_notice"):
    st.warning(st.session_state.pop("queue_notice"))


def reload():
    # server state wins after a rejected decision
    st.session_state["queue_notice"] = "The request had already changed. The queue has been reloaded."
    st.rerun()


def decision_controls(req, prefix):
    if not can_decide(req, user):
        return
    comment = st.text_input("Comment", key=f"{prefix}_comment_{req.id}")
    a, r = st.columns(2)
    if a.button("✅ Approve", key=f"{prefix}_approve_{req.id}", use_container_width=True):
        if call(service.approve, req, user, comment, on_business_error=reload):
            st.success("Approved")
            st.rerun()
    if r.button("❌ Reject", key=f"{prefix}_reject_{req.id}", use_container_width=True):
        if call(service.reject, req, user, comment, on_business_error=reload):
            st.success("Rejected")
            st.rerun()


tab_leave, tab_fix = st.tabs(["Leave", "Time correction"])

with tab_leave:
    leave_requests = call(service.get_leave_requests, status) or []
    if not leave_requests:
        st.info("Nothing to review.")

    pending = [r for r in leave_requests if can_decide(r, user)]
    if pending and st.button(f"Approve all {len(pending)} pending", key="bulk_leave"):
        failures = call(service.bulk_decide, pending, RequestStatus.APPROVED, user)
        if failures:
            st.session_state["queue_notice"] = (
                f"{len(failures)} request(s) could not be approved: "
                + "; ".join(f"{rid}: {msg}" for rid, msg in failures.items())
            )
        st.rerun()

    for req in leave_requests:
        with st.container(border=True):
            st.markdown(
                f"**{req.user_name or req.user_id}** · {req.type.value.title()} · "
                f"{req.start_date} → {req.end_date} ({req.duration_days}d) · `{req.status.value}`"
            )
            st.write(req.reason)
            st.caption(f"Submitted {format_datetime(req.created_at, tz)}")
            decision_controls(req, "leave")

with tab_fix:
    fix_requests = call(service.get_time_modification_requests, status) or []
    if not fix_requests:
        st.info("Nothing to review.")

    for req in fix_requests:
        with st.container(border=True):
            st.markdown(f"**{req.user_name or req.user_id}** · {req.date} · `{req.status.value}`")
            st.write(
                f"Clock in {format_time(req.original_clock_in, tz)} → {format_time(req.requested_clock_in, tz)}, "
                f"clock out {format_time(req.original_clock_out, tz)} → {format_time(req.requested_clock_out, tz)}"
            )
            st.write(req.reason)
            decision_controls(req, "fix")
