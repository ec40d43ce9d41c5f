"""
Admin Dashboard - Loan import, portfolio, agents and performance.
Roles: admin
"""

import streamlit as st
import pandas as pd

from core.models.state import (
    AddAgent, DeleteAgent, DeleteLoan, DistributeUnassigned, ImportLoans
)
from core.services.loan_import_service import LoanImportService
from core.services.loan_service import LoanService
from core.services.report_service import ReportService
from utils.auth_guard import require_role, get_app
from utils.exceptions import LoanCollectionException
from utils.formatters import format_currency
from utils.loan_widgets import render_loan_table, select_loan, render_loan_details
from utils.sidebar import render_sidebar

require_role(["admin"])
render_sidebar()

app = get_app()
loan_svc = LoanService()
report_svc = ReportService()

st.title("Admin Dashboard")
st.caption(f"Welcome, **{app.current_user.name}**")
st.markdown("---")

totals = report_svc.portfolio_totals(app.loans)
k1, k2, k3, k4, k5 = st.columns(5)
k1.metric("Total Loans", totals['total_loans'])
k2.metric("Outstanding Loans", totals['outstanding_loans'])
k3.metric("Unassigned", totals['unassigned_loans'])
k4.metric("Total Outstanding", format_currency(totals['total_outstanding']))
k5.metric("Total Collected", format_currency(totals['total_collected']))

tab_import, tab_loans, tab_agents, tab_perf = st.tabs(
    ["Import Loans", "All Loans", "Manage Agents", "Performance"]
)

# ===========================
# TAB 1 - Import
# ===========================
with tab_import:
    st.subheader("Import Loans from Spreadsheet")
    st.caption("Upload a CSV or Excel file. The first row must contain column headers.")

    uploaded = st.file_uploader("Loan file", type=["csv", "xlsx", "xls"], key="loan_upload")
    if uploaded is not None and st.button("Parse File", key="parse_upload"):
        try:
            result = LoanImportService().import_file(uploaded.getvalue(), uploaded.name)
            st.session_state["pending_import"] = result
        except LoanCollectionException as e:
            st.session_state.pop("pending_import", None)
            st.error(f"{e}")

    pending = st.session_state.get("pending_import")
    if pending is not None:
        st.info(pending.summary())
        if pending.skipped_rows:
            st.caption(f"Skipped rows: {', '.join(str(r) for r in pending.skipped_rows)}")
        render_loan_table(pending.loans, app.agents, key="pending_import")

        st.markdown("**Distribute the imported loans among collection agents now?**")
        c1, c2, c3 = st.columns(3)
        if c1.button("Import & Distribute", type="primary", use_container_width=True):
            try:
                app.dispatch(ImportLoans(loans=tuple(pending.loans), distribute=True))
                st.session_state.pop("pending_import", None)
                st.success(f"Imported and distributed {len(pending.loans)} loan(s).")
                st.rerun()
            except LoanCollectionException as e:
                st.error(f"{e}")
        if c2.button("Import Unassigned", use_container_width=True):
            try:
                app.dispatch(ImportLoans(loans=tuple(pending.loans), distribute=False))
                st.session_state.pop("pending_import", None)
                st.success(f"Imported {len(pending.loans)} loan(s) without assigning them.")
                st.rerun()
            except LoanCollectionException as e:
                st.error(f"{e}")
        if c3.button("Cancel", use_container_width=True):
            st.session_state.pop("pending_import", None)
            st.rerun()

# ===========================
# TAB 2 - All Loans
# ===========================
with tab_loans:
    st.subheader("All Loans")

    a1, a2 = st.columns([3, 1])
    with a1:
        term = st.text_input("Search by client, account number or phone", key="admin_search")
    with a2:
        st.markdown("<br>", unsafe_allow_html=True)
        if st.button("Distribute Unassigned", use_container_width=True,
                     disabled=totals['unassigned_loans'] == 0):
            try:
                app.dispatch(DistributeUnassigned())
                st.success("Unassigned loans distributed.")
                st.rerun()
            except LoanCollectionException as e:
                st.error(f"{e}")

    results = loan_svc.search_loans(app.loans, term)
    render_loan_table(results, app.agents, key="all_loans")

    selected = select_loan(results, key="admin_selected_loan")
    if selected is not None:
        with st.container(border=True):
            render_loan_details(app, selected, key="admin_detail")

            confirm = st.checkbox(
                f"I want to permanently delete loan {selected.account_number}",
                key=f"confirm_delete_{selected.id}"
            )
            if st.button("Delete Loan", disabled=not confirm, key="delete_loan"):
                try:
                    app.dispatch(DeleteLoan(loan_id=selected.id))
                    st.success(f"Loan {selected.account_number} deleted.")
                    st.rerun()
                except LoanCollectionException as e:
                    st.error(f"{e}")

# ===========================
# TAB 3 - Agents
# ===========================
with tab_agents:
    st.subheader("Collection Agents")

    roster = pd.DataFrame([{
        "Name": agent.name,
        "Username": agent.username,
        "Role": "Administrator" if agent.is_admin else "Agent",
        "Assigned Loans": len(loan_svc.get_loans_for_agent(app.loans, agent.id)),
    } for agent in app.agents])
    st.dataframe(roster, use_container_width=True, hide_index=True)

    with st.form("add_agent_form", clear_on_submit=True):
        st.markdown("#### Add Agent")
        f1, f2 = st.columns(2)
        name = f1.text_input("Full Name")
        username = f2.text_input("Username")
        if st.form_submit_button("Add Agent"):
            try:
                app.dispatch(AddAgent(name=name, username=username))
                st.success(f"Agent '{username.strip()}' added.")
                st.rerun()
            except LoanCollectionException as e:
                st.error(f"{e}")

    deletable = [agent for agent in app.agents if not agent.is_admin]
    if deletable:
        st.markdown("#### Delete Agent")
        options = {f"{agent.name} (@{agent.username})": agent.id for agent in deletable}
        label = st.selectbox("Agent", list(options.keys()), key="delete_agent_select")
        st.caption("Loans held by this agent become unassigned.")
        confirm_agent = st.checkbox("Confirm deletion", key="confirm_delete_agent")
        if st.button("Delete Agent", disabled=not confirm_agent):
            try:
                app.dispatch(DeleteAgent(agent_id=options[label]))
                st.success("Agent deleted.")
                st.rerun()
            except LoanCollectionException as e:
                st.error(f"{e}")

# ===========================
# TAB 4 - Performance
# ===========================
with tab_perf:
    st.subheader("Agent Performance Metrics")

    performance = report_svc.agent_performance(app.agents, app.loans)
    if not performance:
        st.info("No agent performance data. Add agents and assign loans.")
    else:
        st.dataframe(report_svc.performance_frame(performance), use_container_width=True, hide_index=True)

    st.markdown("#### Portfolio Snapshot: Outstanding Balances")
    snapshot = report_svc.portfolio_snapshot(performance)
    if snapshot:
        for share in snapshot:
            st.markdown(f"**{share.name}** · {format_currency(share.outstanding)}")
            st.progress(min(max(share.percent_of_max / 100, 0.0), 1.0),
                        text=f"{share.percent_of_max:.0f}%")
        chart = pd.DataFrame(
            {"Outstanding": [float(s.outstanding) for s in snapshot]},
            index=[s.name for s in snapshot],
        )
        st.bar_chart(chart)
    elif performance:
        st.info("No outstanding balances to display in snapshot.")
    else:
        st.info("No agent data available to display snapshot.")
