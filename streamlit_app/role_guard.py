from pathlib import Path

import streamlit as st

from api import get_context
from attendance_client.role_guard import can_access, role_of


def get_user_role() -> str:
    return role_of(get_context().session.user)


def setup_role_access(current_file: str) -> None:
    # Authentication is already checked in app.py before pages run
    role = get_user_role()
    current_page = Path(current_file).name

    if not can_access(role, current_page):
        st.error("Access restricted. Your role does not have access to this page.")
        st.stop()
