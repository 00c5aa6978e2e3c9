from datetime import date

import pandas as pd
import plotly.express as px
import streamlit as st

from api import call, get_context
from attendance_client.schemas.manager import ExportFormat
from role_guard import setup_role_access

setup_role_access(__file__)

ctx = get_context()
manager = ctx.manager_service

st.title("📋 Reports")

today = date.today()

# --- MONTHLY REPORT ---
st.subheader("Monthly report")
c1, c2 = st.columns(2)
year = c1.number_input("Year", min_value=2000, max_value=today.year + 1, value=today.year, step=1)
month = c2.selectbox("Month", list(range(1, 13)), index=today.month - 1)

reports = call(manager.get_monthly_report, int(year), int(month)) or []
members = {m.id: m for m in (call(manager.get_team_members) or [])}

if reports:
    df = pd.DataFrame([
        {
            "Employee": members[r.user_id].name if r.user_id in members else r.user_id,
            "Working days": r.stats.working_days,
            "Total hours": round(r.stats.total_hours, 1),
            "Average hours": round(r.stats.average_hours, 1),
            "Late": sum(1 for rec in r.records if rec.status.value == "LATE"),
            "Absent": sum(1 for rec in r.records if rec.status.value == "ABSENT"),
        }
        for r in reports
    ])
    st.dataframe(df, use_container_width=True, hide_index=True)

    fig_hours = px.bar(
        df,
        x="Employee",
        y="Total hours",
        title="Hours worked by team member",
        labels={"Total hours": "Hours"},
    )
    st.plotly_chart(fig_hours, use_container_width=True)
else:
    st.info("No report data for this month.")

st.divider()

# --- EXPORT ---
st.subheader("Export")
e1, e2, e3 = st.columns(3)
start_d = e1.date_input("From", value=today.replace(day=1))
end_d = e2.date_input("To", value=today)
fmt = e3.selectbox("Format", [f.value for f in ExportFormat])

if st.button("Generate export", type="primary"):
    result = call(manager.export_team_report, start_d, end_d, fmt)
    if result:
        st.link_button("Download", result.download_url)
