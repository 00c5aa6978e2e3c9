from datetime import date

import pandas as pd
import streamlit as st

from api import call, get_context
from attendance_client.formatting import format_time
from attendance_client.working_hours import compute_working_hours, total_hours
from role_guard import setup_role_access

setup_role_access(__file__)

ctx = get_context()
tz = ctx.settings.timezone

st.title("📜 Attendance History")

today = date.today()
c1, c2 = st.columns(2)
year = c1.number_input("Year", min_value=2000, max_value=today.year + 1, value=today.year, step=1)
month = c2.selectbox("Month", list(range(1, 13)), index=today.month - 1)

records = call(ctx.time_service.get_history, int(year), int(month)) or []

if not records:
    st.info("No attendance records for this month.")
    st.stop()

rows = []
for r in sorted(records, key=lambda r: r.date):
    hours = compute_working_hours(r)
    rows.append({
        "Date": r.date.isoformat(),
        "Clock In": format_time(r.clock_in, tz),
        "Clock Out": format_time(r.clock_out, tz),
        "Break": f"{format_time(r.break_start, tz)} - {format_time(r.break_end, tz)}",
        "Worked": hours.display + (" ⚠️" if hours.clamped else ""),
        "Status": r.status.value.replace("_", " ").title(),
        "Notes": r.notes or "",
    })

st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

m1, m2 = st.columns(2)
m1.metric("Days recorded", len(records))
m2.metric("Total hours", f"{total_hours(records):.1f}h")
