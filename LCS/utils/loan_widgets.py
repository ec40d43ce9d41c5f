"""
Loan widgets shared by the admin and agent dashboards.
Loan table, loan details panel, payment form.
"""

from typing import Optional, Sequence

import streamlit as st

from core.models.entities import CommunicationType, Loan
from core.models.state import AddCommunicationLog, RecordPayment, UpdateRemark
from core.services.report_service import ReportService
from utils.exceptions import LoanCollectionException
from utils.formatters import format_currency, format_date, status_badge, to_decimal

report_svc = ReportService()


def render_loan_table(loans: Sequence[Loan], agents, key: str):
    """Show loans as a dataframe with a CSV download"""
    if not loans:
        st.info("No loans to display.")
        return

    df = report_svc.loans_frame(loans, agents)
    st.dataframe(df, use_container_width=True, hide_index=True)
    st.download_button(
        "Download (CSV)", df.to_csv(index=False),
        file_name=f"{key}.csv", mime="text/csv", key=f"{key}_download"
    )


def select_loan(loans: Sequence[Loan], key: str) -> Optional[Loan]:
    """Selectbox over loans, labelled by account number and client"""
    if not loans:
        return None
    options = {f"{loan.account_number} - {loan.client or 'N/A'}": loan.id for loan in loans}
    label = st.selectbox("Select Loan", list(options.keys()), key=key)
    loan_id = options[label]
    for loan in loans:
        if loan.id == loan_id:
            return loan
    return None


def render_payment_form(app, loan: Loan, key: str):
    """Record a payment against the selected loan"""
    if loan.is_paid_off:
        st.success("This loan is fully paid off.")
        return

    st.caption(f"Outstanding balance: **{format_currency(loan.outstanding_balance)}**")
    with st.form(f"{key}_payment_form"):
        amount = st.number_input(
            "Payment Amount ($)", min_value=0.0, step=100.0, format="%.2f", key=f"{key}_amount"
        )
        submitted = st.form_submit_button("Record Payment", use_container_width=True)

    if submitted:
        try:
            app.dispatch(RecordPayment(loan_id=loan.id, amount=to_decimal(amount)))
            st.success(f"Payment of {format_currency(amount)} recorded for {loan.account_number}.")
            st.rerun()
        except LoanCollectionException as e:
            st.error(f"{e}")


def render_loan_details(app, loan: Loan, key: str):
    """Full loan view: figures, remark, communication and payment history"""
    summary = report_svc.loan_summary(loan)
    agent_names = {agent.id: agent.name for agent in app.agents}

    st.markdown(f"### {loan.client or 'N/A'} · `{loan.account_number}`")
    st.markdown(status_badge(loan.status))

    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Original Amount", format_currency(summary['original_amount']))
    m2.metric("Outstanding", format_currency(summary['outstanding_balance']))
    m3.metric("Total Repaid", format_currency(summary['total_repaid']))
    m4.metric("Principal Repaid", format_currency(summary['principal_repaid']))

    d1, d2 = st.columns(2)
    with d1:
        st.markdown(f"**Branch:** {loan.branch or 'N/A'}")
        st.markdown(f"**Phone:** {loan.phone_number or 'N/A'}")
        st.markdown(f"**Product:** {loan.product or 'N/A'}")
        st.markdown(f"**Term:** {loan.term if loan.term is not None else 'N/A'}")
        st.markdown(f"**Total Liability:** {format_currency(loan.total_liab)}")
        st.markdown(f"**Repayment Amount:** {format_currency(loan.repayment_amount)}")
    with d2:
        st.markdown(f"**Start Date:** {format_date(loan.start_date)}")
        st.markdown(f"**Matured On:** {format_date(loan.matured_on)}")
        st.markdown(f"**Expected Repayment:** {format_date(loan.expected_repayment_date)}")
        st.markdown(f"**Past Due Since:** {format_date(loan.pass_due_date)}")
        st.markdown(f"**Interest Repaid:** {format_currency(loan.interest_repaid)}")
        st.markdown(f"**Interest Outstanding:** {format_currency(loan.interest_outstanding)}")
    st.markdown(f"**Assigned Agent:** {agent_names.get(loan.assigned_agent_id, 'Unassigned')}")

    # Remark
    st.markdown("#### Remark")
    with st.form(f"{key}_remark_form"):
        remark = st.text_area("Remark", value=loan.remark or "", key=f"{key}_remark")
        if st.form_submit_button("Save Remark"):
            try:
                app.dispatch(UpdateRemark(loan_id=loan.id, remark=remark))
                st.success("Remark updated.")
                st.rerun()
            except LoanCollectionException as e:
                st.error(f"{e}")

    # Communication log
    st.markdown("#### Communication Log")
    if app.current_user is not None:
        with st.form(f"{key}_comm_form", clear_on_submit=True):
            c1, c2 = st.columns([1, 3])
            with c1:
                comm_type = st.selectbox(
                    "Type", [t.value for t in CommunicationType], key=f"{key}_comm_type"
                )
            with c2:
                notes = st.text_area("Notes", key=f"{key}_comm_notes")
            if st.form_submit_button("Add Log Entry"):
                try:
                    app.dispatch(AddCommunicationLog(
                        loan_id=loan.id, type=CommunicationType(comm_type),
                        notes=notes, agent_id=app.current_user.id,
                    ))
                    st.success("Communication logged.")
                    st.rerun()
                except LoanCollectionException as e:
                    st.error(f"{e}")

    if loan.communication_history:
        for entry in loan.communication_history:
            st.markdown(
                f"- **{format_date(entry.date)}** · {entry.type.value} · _{entry.agent_name}_  \n  {entry.notes}"
            )
    else:
        st.caption("No communication logged yet.")

    # Payments
    st.markdown("#### Payment History")
    if loan.payment_history:
        for payment in loan.payment_history:
            st.markdown(f"- {format_date(payment.date)}: **{format_currency(payment.amount)}**")
    else:
        st.caption("No payments recorded yet.")
