"""
Shared sidebar renderer for all authenticated pages.
Displays user info, role badge, and logout button.
"""

import streamlit as st
from utils.auth_guard import handle_logout, get_current_user, is_admin


def render_sidebar():
    """Render the common sidebar on every authenticated page."""
    with st.sidebar:
        st.markdown("## 📒 Loan Collection")
        st.markdown("---")

        user = get_current_user()
        if user:
            st.markdown(f"**{user.name}**")
            st.caption(f"@{user.username}")
            st.caption("Role: Administrator" if is_admin() else "Role: Collection Agent")

            st.markdown("---")

            if st.button("Logout", use_container_width=True, key="sidebar_logout"):
                handle_logout()
