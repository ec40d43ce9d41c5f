"""
Agent Dashboard - Assigned loans, payments and collection notes.
Roles: agent
"""

import streamlit as st

from core.services.loan_service import LoanService
from core.services.report_service import ReportService
from utils.auth_guard import require_role, get_app
from utils.formatters import format_currency
from utils.loan_widgets import render_loan_table, select_loan, render_loan_details, render_payment_form
from utils.sidebar import render_sidebar

require_role(["agent"])
render_sidebar()

app = get_app()
user = app.current_user
loan_svc = LoanService()

st.title("My Collections")
st.caption(f"Welcome, **{user.name}**")
st.markdown("---")

my_loans = loan_svc.get_loans_for_agent(app.loans, user.id)
mine = ReportService().portfolio_totals(my_loans)

k1, k2, k3 = st.columns(3)
k1.metric("Assigned Loans", mine['total_loans'])
k2.metric("Outstanding", format_currency(mine['total_outstanding']))
k3.metric("Collected", format_currency(mine['total_collected']))

term = st.text_input("Search by client, account number or phone", key="agent_search")
results = loan_svc.search_loans(my_loans, term)
render_loan_table(results, app.agents, key="my_loans")

selected = select_loan(results, key="agent_selected_loan")
if selected is not None:
    tab_pay, tab_detail = st.tabs(["Record Payment", "Loan Details"])
    with tab_pay:
        render_payment_form(app, selected, key="agent_pay")
    with tab_detail:
        render_loan_details(app, selected, key="agent_detail")
