import plotly.express as px
import streamlit as st

from api import call, get_context
from attendance_client.formatting import format_datetime
from role_guard import setup_role_access

setup_role_access(__file__)

ctx = get_context()
manager = ctx.manager_service
tz = ctx.settings.timezone

ALERT_ICONS = {"late": "⏰", "absent": "🚫", "missing_clock_out": "❓"}

st.title("📊 Manager Dashboard")

overview = call(manager.get_dashboard)
if overview:
    c = st.columns(5)
    c[0].metric("Team size", overview.team_size)
    c[1].metric("Present today", overview.today_present)
    c[2].metric("Late today", overview.today_late)
    c[3].metric("Absent today", overview.today_absent)
    c[4].metric("Pending approvals", overview.pending_approvals)

    status_data = {
        "Present": overview.today_present,
        "Late": overview.today_late,
        "Absent": overview.today_absent,
    }
    if sum(status_data.values()) > 0:
        fig_status = px.pie(
            values=list(status_data.values()),
            names=list(status_data.keys()),
            title="Today's attendance",
        )
        fig_status.update_traces(textposition="inside", textinfo="percent+label")
        st.plotly_chart(fig_status, use_container_width=True)

st.divider()

# --- ALERTS ---
head, action = st.columns([4, 1])
head.subheader("Alerts")
unread_only = head.toggle("Unread only", value=True)
if action.button("Mark all read"):
    call(manager.mark_all_alerts_as_read)
    st.rerun()

alerts = call(manager.get_alerts, limit=50, unread_only=unread_only) or []
if not alerts:
    st.info("No alerts.")

for alert in alerts:
    with st.container(border=True):
        cols = st.columns([1, 6, 2, 1])
        cols[0].markdown(ALERT_ICONS.get(alert.type.value, "•"))
        cols[1].markdown(f"**{alert.user_name}** · {alert.date}\n\n{alert.message}")
        cols[2].caption(format_datetime(alert.created_at, tz))
        if not alert.is_read and cols[3].button("Read", key=f"read_{alert.id}"):
            call(manager.mark_alert_as_read, alert.id)
            st.rerun()
