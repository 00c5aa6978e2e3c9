import sys
from pathlib import Path

# Make attendance_client importable when running `streamlit run streamlit_app/app.py` from a checkout
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import streamlit as st

from auth import require_auth, show_profile_section
from navigation import setup_navigation
from role_guard import get_user_role

st.set_page_config(page_title="Attendance", layout="wide")

# Restores the persisted session (and re-validates it) on first run
require_auth()

show_profile_section()

pg = setup_navigation(get_user_role())

if pg:
    pg.run()
