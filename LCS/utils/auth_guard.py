"""
Authentication guard utilities for Streamlit pages.
Provides the shared application controller, login-required and role checks.
"""

import streamlit as st

from core.models.state import Logout


def get_app():
    """Return the application controller for this browser session."""
    if "app" not in st.session_state:
        from core.services.app_controller import LoanCollectionApp
        st.session_state["app"] = LoanCollectionApp()
    return st.session_state["app"]


def require_login():
    """Stop page execution if user is not logged in."""
    if not is_logged_in():
        st.warning("Please log in to continue.")
        st.stop()


def require_role(allowed_roles: list):
    """Stop page execution if user role is not in allowed_roles."""
    require_login()
    user_role = get_user_role()
    if any(role.lower() == user_role for role in allowed_roles):
        return
    st.error("You do not have permission to access this page.")
    st.stop()


def get_current_user():
    """Return the logged-in Agent or None."""
    return get_app().current_user


def get_user_role() -> str:
    """Return current user role string in lowercase."""
    user = get_current_user()
    if user is None:
        return ""
    return "admin" if user.is_admin else "agent"


def is_logged_in() -> bool:
    return get_current_user() is not None


def handle_logout():
    """Logout the current user and rerun."""
    get_app().dispatch(Logout())

    for key in list(st.session_state.keys()):
        if key != "app":
            del st.session_state[key]

    st.rerun()


def is_admin() -> bool:
    """Check if current user is an admin."""
    return get_user_role() == "admin"
