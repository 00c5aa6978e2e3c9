import logging

import streamlit as st

from attendance_client.context import AppContext, build_context
from attendance_client.core.config import configure_logging
from attendance_client.core.exceptions import (
    ApiError,
    AuthenticationError,
    BusinessRuleError,
    ClockActionInProgress,
    user_message,
)
from attendance_client.session import MappingSessionStore

logger = logging.getLogger(__name__)

CONTEXT_KEY = "app_context"


def _on_logout():
    st.session_state["session_expired"] = True


def get_context() -> AppContext:
    """One context per browser session, created on first use."""
    if CONTEXT_KEY not in st.session_state:
        configure_logging()
        # scoped to this browser session
        ctx = build_context(store=MappingSessionStore(st.session_state))
        ctx.session.add_logout_listener(_on_logout)
        ctx.start()
        st.session_state["session_expired"] = False
        st.session_state[CONTEXT_KEY] = ctx
    return st.session_state[CONTEXT_KEY]


def call(fn, *args, on_business_error=None, **kwargs):
    """
    Run one remote call for a page. Errors become st.error messages and
    None is returned; a 401 reruns the app so the login screen takes over.
    """
    try:
        return fn(*args, **kwargs)
    except AuthenticationError:
        st.rerun()
    except BusinessRuleError as e:
        st.error(user_message(e))
        if on_business_error:
            on_business_error()
    except (ApiError, ClockActionInProgress) as e:
        logger.info("%s failed: %s", getattr(fn, "__name__", fn), e)
        st.error(user_message(e))
    return None
