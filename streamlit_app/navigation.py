"""
Navigation module for role-based page routing using st.navigation
"""
import streamlit as st

from attendance_client.role_guard import pages_for_role

PAGE_ICONS = {
    "1_Dashboard.py": "🏠",
    "2_Clock.py": "⏱️",
    "3_History.py": "📜",
    "4_Requests.py": "📅",
    "5_Manager_Dashboard.py": "📊",
    "6_Team_Overview.py": "👥",
    "7_Approval_Queue.py": "📝",
    "8_Reports.py": "📋",
}


def get_pages_for_role(role: str) -> list:
    """
    Get list of Page objects for the given role using st.navigation format
    """
    return [
        st.Page(f"app_pages/{file_name}", title=label, icon=PAGE_ICONS.get(file_name))
        for file_name, label in pages_for_role(role).items()
    ]


def setup_navigation(role: str):
    """
    Setup role-based navigation and return the navigation object
    """
    pages = get_pages_for_role(role)

    if not pages:
        st.error("No pages available for your role. Please contact an administrator.")
        st.stop()
        return None

    return st.navigation(pages)
