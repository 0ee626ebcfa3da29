"""
Streamlit Frontend for Finance Tracker

This is the presentation layer: it reads the clock, formats money and
draws the pages. Every figure it shows comes from the orchestrator flows.

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Explicit "Save" for every record change
3. Validation messages shown next to the form
4. No calculations in the UI
"""

import asyncio
from datetime import date, timedelta
from decimal import Decimal
from uuid import uuid4

import streamlit as st

from finance_tracker.config import get_settings
from finance_tracker.models import (
    Account,
    AccountType,
    Budget,
    Goal,
    RecordKind,
    Transaction,
    TransactionFilter,
    TransactionType,
    default_categories,
)
from finance_tracker.orchestrator import (
    CalculatorFlow,
    DashboardFlow,
    RecordFlow,
    RecordRejectedError,
    create_app_components,
)
from finance_tracker.services.storage import InMemoryRecordStore
from finance_tracker.simulation import PeriodUnit, RateUnit
from finance_tracker.utils import (
    format_currency,
    format_percentage,
    month_bounds,
    month_of,
    parse_currency_input,
    shift_month,
)


# Page configuration
st.set_page_config(
    page_title="Finance Tracker",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def sample_records(today: date) -> list:
    """Demo data: a few accounts and two months of transactions."""
    current = month_bounds(month_of(today))
    previous = month_bounds(shift_month(month_of(today), -1))

    def tx(tx_id, day, type_, amount, category_id, description, account_id="checking"):
        return Transaction(
            id=tx_id,
            account_id=account_id,
            category_id=category_id,
            type=type_,
            amount=Decimal(amount),
            description=description,
            date=day,
        )

    income, expense = TransactionType.INCOME, TransactionType.EXPENSE
    return [
        *default_categories(),
        Account(id="checking", name="Checking", type=AccountType.BANK,
                balance=Decimal("4250.00"), color="#2196F3"),
        Account(id="wallet", name="Wallet", type=AccountType.CASH,
                balance=Decimal("180.00"), color="#4CAF50"),
        Account(id="card", name="Credit Card", type=AccountType.CREDIT,
                balance=Decimal("1320.00"), credit_limit=Decimal("5000"),
                due_date=10, closing_date=3, color="#F44336"),
        tx("t1", previous.start, income, "5200.00", "1", "Salary"),
        tx("t2", previous.start + timedelta(days=4), expense, "1800.00", "4", "Rent"),
        tx("t3", previous.start + timedelta(days=9), expense, "640.00", "5", "Groceries"),
        tx("t4", current.start, income, "5200.00", "1", "Salary"),
        tx("t5", current.start, expense, "1800.00", "4", "Rent"),
        tx("t6", min(current.start + timedelta(days=2), today), expense,
           "310.50", "5", "Groceries"),
        tx("t7", today, expense, "89.90", "9", "Streaming", account_id="card"),
        Budget(id="b1", category_id="5", amount=Decimal("800")),
        Budget(id="b2", category_id="9", amount=Decimal("150")),
        Goal(id="g1", name="Emergency fund", target_amount=Decimal("20000"),
             current_amount=Decimal("7500"), deadline=date(today.year + 1, 12, 31)),
    ]


@st.cache_resource
def get_components() -> tuple[RecordFlow, DashboardFlow, CalculatorFlow]:
    """Get or create application components (cached)."""
    store = InMemoryRecordStore(sample_records(date.today()))
    return create_app_components(store=store)


def money(amount) -> str:
    settings = get_settings().app
    return format_currency(amount, settings.default_currency, settings.default_locale)


def main():
    """Main application entry point."""
    record_flow, dashboard_flow, calculator_flow = get_components()

    # Sidebar navigation
    st.sidebar.title("💰 Finance Tracker")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📊 Dashboard", "🧾 Transactions", "🎯 Budgets & Goals", "🧮 Calculator"],
        index=0,
    )

    today = date.today()

    if page == "📊 Dashboard":
        render_dashboard_page(dashboard_flow, today)
    elif page == "🧾 Transactions":
        render_transactions_page(record_flow, dashboard_flow)
    elif page == "🎯 Budgets & Goals":
        render_budgets_page(dashboard_flow, today)
    elif page == "🧮 Calculator":
        render_calculator_page(calculator_flow)


def render_dashboard_page(dashboard_flow: DashboardFlow, today: date):
    """Monthly overview."""
    summary = run_async(dashboard_flow.dashboard(today))

    st.title("📊 Dashboard")
    st.caption(f"Month {summary.current_month.label}")

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total balance", money(summary.total_balance))
    col2.metric(
        "Income", money(summary.monthly_income), summary.income_change.label
    )
    col3.metric(
        "Expenses", money(summary.monthly_expense), summary.expense_change.label,
        delta_color="inverse",
    )
    col4.metric("Savings rate", format_percentage(summary.savings_rate))

    col1, col2, col3 = st.columns(3)
    col1.metric("Biggest expense", money(summary.biggest_expense))
    col2.metric("Average daily expense", money(summary.average_daily_expense))
    col3.metric(
        "Credit used",
        money(summary.credit.used),
        format_percentage(summary.credit.utilization) + " of limit",
        delta_color="off",
    )

    st.subheader("Expenses by category")
    if summary.expense_by_category:
        st.table([
            {
                "Category": share.group.name,
                "Total": money(share.group.total),
                "Share": format_percentage(share.percentage),
            }
            for share in summary.expense_by_category
        ])
    else:
        st.info("No expenses this month.")

    st.subheader("Monthly trend")
    st.bar_chart(
        {
            "Income": [float(m.income) for m in summary.monthly_trend],
            "Expenses": [float(m.expense) for m in summary.monthly_trend],
        }
    )
    st.line_chart({"Balance": [float(p.balance) for p in summary.balance_trend]})

    st.subheader("Recent transactions")
    st.table([
        {
            "Date": t.date.isoformat(),
            "Description": t.description,
            "Amount": money(t.amount if t.is_income else -t.amount),
        }
        for t in summary.recent_transactions
    ])


def render_transactions_page(record_flow: RecordFlow, dashboard_flow: DashboardFlow):
    """Entry form and filtered report."""
    st.title("🧾 Transactions")
    settings = get_settings().app

    with st.form("new_transaction"):
        description = st.text_input("Description")
        type_ = st.selectbox("Type", [t.value for t in TransactionType])
        raw_amount = st.text_input("Amount", placeholder="0,00")
        day = st.date_input("Date", value=date.today())
        category_id = st.selectbox(
            "Category", [c.id for c in default_categories()],
            format_func=lambda cid: next(
                c.name for c in default_categories() if c.id == cid
            ),
        )
        submitted = st.form_submit_button("💾 Save")

    if submitted:
        parsed = parse_currency_input(raw_amount, settings.default_locale)
        data = {
            "id": str(uuid4()),
            "account_id": "checking",
            "category_id": category_id,
            "type": type_,
            "amount": parsed.value,
            "description": description,
            "date": day,
        }
        try:
            _, result = run_async(record_flow.add(data, RecordKind.TRANSACTION))
            st.success(f"Saved {money(parsed.value)}")
            for warning in result.warnings:
                st.warning(warning.message)
        except RecordRejectedError as e:
            st.error(str(e))

    st.subheader("Report")
    col1, col2 = st.columns(2)
    date_from = col1.date_input("From", value=month_bounds(month_of(date.today())).start)
    date_to = col2.date_input("To", value=date.today())

    transactions, totals = run_async(dashboard_flow.report(
        TransactionFilter(date_from=date_from, date_to=date_to)
    ))

    col1, col2, col3 = st.columns(3)
    col1.metric("Income", money(totals.income))
    col2.metric("Expenses", money(totals.expense))
    col3.metric("Balance", money(totals.balance))

    st.table([
        {
            "Date": t.date.isoformat(),
            "Description": t.description,
            "Type": t.type.value,
            "Amount": money(t.amount),
        }
        for t in transactions
    ])


def render_budgets_page(dashboard_flow: DashboardFlow, today: date):
    """Budget progress bars and goal progress."""
    st.title("🎯 Budgets & Goals")

    st.subheader("Budgets")
    progress = run_async(dashboard_flow.budget_status(today))
    if not progress:
        st.info("No budgets yet.")
    for budget_id, item in progress.items():
        st.markdown(
            f"**{budget_id}**: {money(item.spent)} spent, "
            f"{money(item.remaining)} left"
        )
        st.progress(int(item.percentage))
        if item.is_over_budget:
            st.warning(f"Over budget ({format_percentage(item.raw_percentage)})")

    st.subheader("Goals")
    goals, summary = run_async(dashboard_flow.goals(today))
    st.caption(
        f"{money(summary.total_current)} of {money(summary.total_target)} "
        f"({format_percentage(summary.percentage)})"
    )
    for goal in goals:
        st.markdown(f"**{goal.goal_id}**: {money(goal.remaining)} to go")
        st.progress(int(goal.percentage))
        if goal.days_remaining is not None:
            st.caption(f"{goal.days_remaining} days remaining")


def render_calculator_page(calculator_flow: CalculatorFlow):
    """Compound growth and loan calculators."""
    st.title("🧮 Calculator")

    tab_investment, tab_loan = st.tabs(["Investment", "Loan"])

    with tab_investment:
        initial = st.number_input("Initial amount", min_value=0.0, value=1000.0)
        contribution = st.number_input("Monthly contribution", min_value=0.0, value=100.0)
        rate = st.number_input("Interest rate (%)", value=12.0)
        rate_unit = RateUnit(st.radio("Rate is", [u.value for u in RateUnit], horizontal=True))
        period = st.number_input("Period", min_value=0, value=10)
        period_unit = PeriodUnit(st.radio(
            "Period in", [u.value for u in PeriodUnit], horizontal=True
        ))

        result = run_async(calculator_flow.investment(
            initial, contribution, rate, period, rate_unit, period_unit
        ))
        if not result.is_valid:
            st.warning("Enter a positive period and non-negative amounts.")
        else:
            col1, col2, col3 = st.columns(3)
            col1.metric("Future value", money(result.future_value))
            col2.metric("Total invested", money(result.total_invested))
            col3.metric("Interest earned", money(result.interest_earned))
            st.line_chart({
                "Balance": [float(row.total_balance) for row in result.trace],
                "Invested": [float(row.cumulative_invested) for row in result.trace],
            })

    with tab_loan:
        principal = st.number_input("Loan amount", min_value=0.0, value=10000.0)
        loan_rate = st.number_input("Annual interest rate (%)", value=18.0)
        loan_months = st.number_input("Months", min_value=0, value=24)

        loan = run_async(calculator_flow.loan(
            principal, loan_rate, loan_months, RateUnit.ANNUAL, PeriodUnit.MONTHS
        ))
        if not loan.is_valid:
            st.warning("Enter a positive amount, rate and period.")
        else:
            col1, col2, col3 = st.columns(3)
            col1.metric("Monthly payment", money(loan.monthly_payment))
            col2.metric("Total paid", money(loan.total_payment))
            col3.metric("Total interest", money(loan.total_interest))


if __name__ == "__main__":
    main()
