from datetime import date

import pandas as pd
import streamlit as st

from api import call, get_context
from attendance_client.formatting import format_time
from attendance_client.working_hours import compute_working_hours
from role_guard import setup_role_access

setup_role_access(__file__)

ctx = get_context()
manager = ctx.manager_service
tz = ctx.settings.timezone

st.title("👥 Team Overview")

day = st.date_input("Date", value=date.today())

members = call(manager.get_team_members) or []
records = call(manager.get_team_attendance, day) or []
by_user = {r.user_id: r for r in records}

rows = []
for m in members:
    r = by_user.get(m.id)
    rows.append({
        "Employee ID": m.employee_id,
        "Name": m.name,
        "Department": m.department or "",
        "Clock In": format_time(r.clock_in, tz) if r else "-",
        "Clock Out": format_time(r.clock_out, tz) if r else "-",
        "Worked": compute_working_hours(r).display,
        "Status": r.status.value.replace("_", " ").title() if r else "No record",
    })

if not rows:
    st.info("No team members found.")
else:
    df = pd.DataFrame(rows)
    st.dataframe(df, use_container_width=True, hide_index=True)
    st.caption(f"{len(records)} of {len(members)} members have a record for {day}.")
