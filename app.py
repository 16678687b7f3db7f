"""
app.py
Streamlit dashboard for mobile data lines (admin CRUD + read-only customer view).
Run: streamlit run app.py
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date
import pandas as pd
import streamlit as st

import db
import auth
import customers
import dates
import utils
from models import (
    LINE_TYPES,
    PAYMENT_STATUSES,
    RENEWAL_STATUSES,
    USER_MULTIPLE,
    USER_SINGLE,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Line Renewals Dashboard", layout="wide")

ROLE_LABELS = {
    "Admin": "admin",
    "Customer (one line, by mobile number)": USER_SINGLE,
    "Customer (several lines, by name)": USER_MULTIPLE,
}


def init_once():
    # Initialize DB + default admin if needed
    default_hash = auth.hash_password("admin123")
    db.init_db(default_hash)


def require_login():
    for key, default in (("logged_in", False), ("username", None), ("role", None)):
        if key not in st.session_state:
            st.session_state[key] = default


def logout():
    st.session_state.logged_in = False
    st.session_state.username = None
    st.session_state.role = None
    st.success("Logged out.")


def login_screen():
    st.title("🔐 Login")

    col1, col2 = st.columns([1, 1])
    with col1:
        role_label = st.radio("I am", list(ROLE_LABELS.keys()))
        role = ROLE_LABELS[role_label]

        if role == "admin":
            username = st.text_input("Username", value="admin")
            password = st.text_input("Password", type="password")
            if st.button("Login", type="primary"):
                if auth.login(username.strip(), password):
                    st.session_state.logged_in = True
                    st.session_state.username = username.strip()
                    st.session_state.role = role
                    st.rerun()
                else:
                    st.error("Invalid username or password.")
        else:
            prompt = "Mobile number" if role == USER_SINGLE else "Customer name"
            username = st.text_input(prompt)
            if st.button("Show my lines", type="primary"):
                if not username.strip():
                    st.error(f"{prompt} is required.")
                else:
                    st.session_state.logged_in = True
                    st.session_state.username = username.strip()
                    st.session_state.role = role
                    st.rerun()

    with col2:
        st.info(
            "First run creates a default admin:\n\n"
            "- username: **admin**\n"
            "- password: **admin123**\n\n"
            "You will be forced to change it on first login.\n\n"
            "Customers only see their own lines (read-only)."
        )


def password_form(key: str) -> bool:
    new1 = st.text_input("New password", type="password", key=f"{key}_1")
    new2 = st.text_input("Confirm new password", type="password", key=f"{key}_2")
    if st.button("Update password", type="primary", key=f"{key}_btn"):
        error = auth.validate_new_password(new1, new2)
        if error:
            st.error(error)
            return False
        auth.change_password(st.session_state.username, new1)
        st.success("Password updated.")
        return True
    return False


def force_change_password_screen():
    st.title("⚠️ Change Password (Required)")
    st.warning("You must change the default password before using the app.")
    if password_form("force_pw"):
        st.rerun()


# ---------- Admin pages ----------

def load_customers() -> list | None:
    try:
        return customers.list_customers()
    except sqlite3.Error as exc:
        logger.exception("Failed to load customers")
        st.error(f"فشل في تحميل بيانات العملاء: {exc}")
        return None


def dashboard_page():
    st.header("📊 لوحة التحكم")

    rows = load_customers()
    if rows is None:
        return
    stats = utils.dashboard_stats(rows)

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("إجمالي العملاء", stats.total_customers)
    c2.metric("العملاء المدفوعون", stats.paid_customers)
    c3.metric("التجديدات المكتملة", stats.renewed_customers)
    c4.metric("إجمالي الإيرادات", f"{stats.total_revenue:,.0f} {utils.CURRENCY}")

    st.divider()

    c1, c2 = st.columns(2)
    with c1:
        st.subheader("✅ معدل الدفع")
        st.metric("Payment rate", f"{stats.payment_rate}%", label_visibility="collapsed")
        st.caption(f"{stats.paid_customers} من {stats.total_customers} عميل دفعوا")
    with c2:
        st.subheader("🔁 معدل التجديد")
        st.metric("Renewal rate", f"{stats.renewal_rate}%", label_visibility="collapsed")
        st.caption(f"{stats.renewed_customers} من {stats.total_customers} عميل جددوا")


def customer_form(existing=None):
    if existing:
        st.subheader(f"✏️ تعديل العميل (ID: {existing.id})")
    else:
        st.subheader("➕ إضافة عميل جديد")

    assumed_year = db.get_assumed_year()

    col1, col2, col3 = st.columns(3)
    with col1:
        customer_name = st.text_input("اسم العميل", value=(existing.customer_name if existing else ""))
        mobile_number = st.text_input("رقم الموبايل", value=(existing.mobile_number if existing else ""))
        line_options = sorted(set(LINE_TYPES) | ({existing.line_type} if existing else set()))
        line_type = st.selectbox(
            "نوع الخط (جيجا)",
            options=line_options,
            index=(line_options.index(existing.line_type) if existing else 0),
        )

    with col2:
        charging_date = st.text_input(
            "تاريخ الشحن", value=((existing.charging_date or "") if existing else date.today().isoformat())
        )
        renewal_date = st.text_input(
            "تاريخ التجديد (optional)", value=((existing.renewal_date or "") if existing else "")
        )
        st.caption(
            "Renewal shown: "
            + dates.format_renewal(charging_date, renewal_date, assumed_year)
        )

    with col3:
        monthly_price = st.text_input(
            "السعر الشهري",
            value=("" if not existing or existing.monthly_price is None else str(existing.monthly_price)),
        )
        payment_status = st.selectbox(
            "حالة الدفع",
            options=PAYMENT_STATUSES,
            index=(0 if existing and utils.is_paid(existing.payment_status) else 1),
        )
        renewal_status = st.selectbox(
            "حالة التجديد",
            options=RENEWAL_STATUSES,
            index=(0 if existing and utils.is_renewed(existing.renewal_status) else 1),
        )

    errors = utils.validate_customer_inputs(
        customer_name, mobile_number, line_type, monthly_price, charging_date, renewal_date, assumed_year
    )
    for e in errors:
        st.error(e)

    if st.button("حفظ", type="primary", disabled=bool(errors)):
        fields = utils.customer_fields(
            customer_name, mobile_number, line_type, monthly_price,
            charging_date, renewal_date, payment_status, renewal_status,
        )
        try:
            if existing:
                customers.update_customer(existing.id, fields)
                st.success("تم تحديث بيانات العميل")
            else:
                customers.add_customer(fields)
                st.success("تمت إضافة العميل")
        except customers.CustomerNotFound:
            st.error("العميل غير موجود")
            return
        st.session_state.edit_customer_id = None
        st.rerun()


def customers_page():
    st.header("👥 قائمة العملاء")

    rows = load_customers()
    if rows is None:
        return

    assumed_year = db.get_assumed_year()
    if rows:
        st.dataframe(utils.customers_frame(rows, assumed_year), use_container_width=True, hide_index=True)
        st.download_button(
            "Download customers.csv",
            data=utils.customers_to_csv_bytes(rows),
            file_name="customers.csv",
            mime="text/csv",
        )
    else:
        st.caption("لا توجد بيانات عملاء")

    st.divider()

    colA, colB = st.columns([1, 2])
    with colA:
        st.subheader("Select customer")
        selected_id = st.selectbox("Customer ID", options=["(none)"] + [str(c.id) for c in rows])

    with colB:
        if selected_id != "(none)":
            st.subheader("Customer actions")
            c1, c2 = st.columns(2)
            with c1:
                if st.button("Edit"):
                    st.session_state.edit_customer_id = int(selected_id)
                    st.rerun()
            with c2:
                delete_confirm = st.checkbox("Confirm delete", value=False, key="del_confirm")
                if st.button("Delete", type="secondary", disabled=not delete_confirm):
                    try:
                        customers.delete_customer(int(selected_id))
                        st.success("تم حذف العميل بنجاح")
                    except customers.CustomerNotFound:
                        st.error("فشل في حذف العميل")
                    st.rerun()

    st.divider()

    if st.session_state.get("edit_customer_id"):
        existing = customers.get_customer(st.session_state.edit_customer_id)
        if existing:
            customer_form(existing=existing)
        if st.button("Cancel edit"):
            st.session_state.edit_customer_id = None
            st.rerun()
    else:
        customer_form(existing=None)


def renewals_page():
    st.header("⏰ Renewals due (next 7 days)")

    rows = load_customers()
    if rows is None:
        return

    due = utils.upcoming_renewals(rows, date.today(), days=7, assumed_year=db.get_assumed_year())
    if due:
        df = pd.DataFrame(
            [
                {
                    "id": c.id,
                    "customer_name": c.customer_name,
                    "mobile_number": c.mobile_number,
                    "renewal_date": dates.format_date(d),
                    "renewal_status": utils.renewal_label(c.renewal_status),
                }
                for c, d in due
            ]
        )
        st.dataframe(df, use_container_width=True, hide_index=True)
    else:
        st.caption("No renewals due in the next 7 days.")


def settings_page():
    st.header("⚙️ Settings")

    st.subheader("Change password")
    password_form("settings_pw")

    st.divider()

    st.subheader("Dates without a year")
    st.caption('Dates entered like "5-Aug" are read as belonging to this year.')
    year = st.number_input(
        "Assumed year", min_value=2000, max_value=2100, value=db.get_assumed_year(), step=1
    )
    if st.button("Save year"):
        db.set_assumed_year(int(year))
        st.success("Assumed year saved.")

    st.divider()

    st.subheader("Sample data")
    st.caption("Insert 3 sample lines for testing (adds new rows each run).")
    if st.button("Insert sample data"):
        utils.insert_sample_data()
        st.success("Sample data inserted.")
        st.rerun()


def admin_app():
    st.sidebar.title("📶 Lines")
    st.sidebar.caption(f"Logged in as: {st.session_state.username}")

    pages = ["Dashboard", "Customers", "Renewals", "Settings"]
    if "page" not in st.session_state:
        st.session_state.page = "Dashboard"
    st.session_state.page = st.sidebar.radio("Navigate", pages, index=pages.index(st.session_state.page))

    if st.sidebar.button("Logout"):
        logout()
        st.rerun()

    if st.session_state.page == "Dashboard":
        dashboard_page()
    elif st.session_state.page == "Customers":
        customers_page()
    elif st.session_state.page == "Renewals":
        renewals_page()
    elif st.session_state.page == "Settings":
        settings_page()


# ---------- Customer view ----------

def user_app():
    user_type = st.session_state.role
    username = st.session_state.username

    if st.sidebar.button("Logout"):
        logout()
        st.rerun()

    try:
        rows = customers.customers_for_user(user_type, username)
    except sqlite3.Error:
        logger.exception("Failed to load lines for %s user", user_type)
        rows = []

    if not rows:
        st.caption("لا توجد بيانات متاحة")
        return

    greeting = rows[0].customer_name if user_type == USER_SINGLE else username
    st.title(f"مرحباً {greeting}")
    st.caption("بيانات خطوطك" if user_type == USER_MULTIPLE else "بيانات خطك")

    assumed_year = db.get_assumed_year()
    for c in rows:
        with st.container(border=True):
            st.subheader("📶 بيانات الخط")
            c1, c2, c3, c4 = st.columns(4)
            c1.metric("رقم الموبايل", c.mobile_number)
            c2.metric("نوع الخط", f"{c.line_type} جيجا")
            c3.metric("تاريخ الشحن", dates.format_raw_date(c.charging_date, assumed_year))
            c4.metric("تاريخ التجديد", dates.format_renewal(c.charging_date, c.renewal_date, assumed_year))


# --------- App entry ---------

def run():
    init_once()
    require_login()

    if not st.session_state.logged_in:
        login_screen()
        return

    if st.session_state.role != "admin":
        user_app()
        return

    # Force password change on first login after DB creation
    if db.is_force_password_change():
        force_change_password_screen()
        return

    admin_app()


if __name__ == "__main__":
    run()
