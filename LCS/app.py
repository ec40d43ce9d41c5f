import logging
import os

import streamlit as st

st.set_page_config(
    page_title="Loan Collection System",
    page_icon="📒",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# Ensure logs directory exists and mirror log records to a file
LOG_DIR = os.getenv("LCS_LOG_DIR", "logs")
if not os.path.exists(LOG_DIR):
    os.makedirs(LOG_DIR)

root_logger = logging.getLogger()
if not any(isinstance(h, logging.FileHandler) for h in root_logger.handlers):
    file_handler = logging.FileHandler(os.path.join(LOG_DIR, "loan_collection.log"), encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root_logger.addHandler(file_handler)

from core.models.state import Login
from utils.auth_guard import is_logged_in, is_admin, get_app
from utils.exceptions import LoanCollectionException

# --- PAGE DEFINITIONS ---
def login_page():
    app = get_app()
    col_left, col_center, col_right = st.columns([1, 2, 1])

    with col_center:
        st.markdown("<br>", unsafe_allow_html=True)
        st.markdown(
            """
            <div style="text-align:center">
                <h1 style="color:#1B4F72">📒 Loan Collection System</h1>
                <p style="color:#5D6D7E; font-size:1.1rem">Track - Collect - Report</p>
            </div>
            """,
            unsafe_allow_html=True,
        )
        st.markdown("---")

        with st.form("login_form", clear_on_submit=False):
            st.subheader("Login")
            username = st.text_input("Username", placeholder="Enter your username")
            submitted = st.form_submit_button("Login", use_container_width=True)

        if submitted:
            try:
                app.dispatch(Login(username=username))
                st.success("Login successful! Redirecting...")
                st.rerun()
            except LoanCollectionException as e:
                st.error(f"{e}")

        st.markdown("---")
        usernames = ", ".join(f"`{agent.username}`" for agent in app.agents)
        st.caption(f"Available users: {usernames}")


# --- NAVIGATION SETUP ---
if not is_logged_in():
    pg = st.navigation([st.Page(login_page, title="Login", default=True)])
    pg.run()

elif is_admin():
    pg = st.navigation({
        "Administration": [st.Page("pages/1_Admin_Dashboard.py", title="Dashboard", default=True)],
    })
    pg.run()

else:
    pg = st.navigation({
        "Collections": [st.Page("pages/2_Agent_Dashboard.py", title="My Loans", default=True)],
    })
    pg.run()
