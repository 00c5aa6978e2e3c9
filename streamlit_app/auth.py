import streamlit as st

from api import get_context
from attendance_client.core.exceptions import (
    ApiError,
    ValidationError,
    user_message,
)
from attendance_client.services.auth_service import sign_in, sign_out


def login_ui():
    ctx = get_context()
    st.title("Login")

    if st.session_state.get("session_expired"):
        st.warning("Your session has ended. Please log in again.")

    field_errors = st.session_state.get("login_errors", {})

    employee_id = st.text_input("Employee ID", key="login_employee_id")
    if field_errors.get("employeeId"):
        st.caption(f"❌ {field_errors['employeeId']}")

    password = st.text_input("Password", type="password", key="login_password")
    if field_errors.get("password"):
        st.caption(f"❌ {field_errors['password']}")

    if st.button("Login", key="login_btn", type="primary"):
        try:
            sign_in(ctx.session, ctx.auth_service, employee_id, password)
        except ValidationError as e:
            st.session_state["login_errors"] = e.errors
            if not e.errors:
                st.error(user_message(e))
            else:
                st.rerun()
            return
        except ApiError as e:
            st.session_state["login_errors"] = {}
            st.error(f"❌ {user_message(e)}")
            return

        st.session_state["login_errors"] = {}
        st.session_state["session_expired"] = False
        st.success("✅ Logged in successfully")
        st.rerun()


def require_auth():
    """
    Call this at the top of the app before any page runs.
    """
    ctx = get_context()
    if not ctx.session.authenticated:
        login_ui()
        st.stop()


def show_profile_section():
    ctx = get_context()
    user = ctx.session.user
    if user is None:
        return

    with st.sidebar:
        st.markdown(f"**{user.name}**")
        st.caption(f"{user.employee_id} · {user.department or '-'} · {user.role.value.title()}")
        if st.button("Logout", key="logout_btn"):
            sign_out(ctx.session, ctx.auth_service)
            st.session_state["session_expired"] = False
            st.rerun()
