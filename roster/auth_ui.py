import streamlit as st

from roster.models import AuthSession
from roster.services.credential_service import CredentialForm
from roster.utils.ui_components import render_status


###########################################################
#  LOGIN PAGE
###########################################################

def render_login_page(form: CredentialForm):
    st.title("Student Roster")
    st.markdown("---")

    col_left, _ = st.columns([1, 1])

    with col_left:
        st.subheader("Login for Teachers")
        render_status(form.message)

        with st.form("login_form"):
            email = st.text_input("Email", placeholder="Your email", key="login_email")
            password = st.text_input(
                "Password", type="password", placeholder="Your password", key="login_password"
            )
            submitted = st.form_submit_button("Log In", disabled=form.loading)

        if submitted:
            with st.spinner("Loading..."):
                form.submit_login(email, password)
            form.reset()
            st.rerun()


###########################################################
#  SIGNED-IN HEADER
###########################################################

def render_account_bar(form: CredentialForm, session: AuthSession):
    """Welcome line plus the Log Out button shown above the roster."""
    col_title, col_logout = st.columns([4, 1])

    with col_title:
        st.title("Student List")
        st.caption(f"Welcome, {session.user.email}!")

    with col_logout:
        if st.button("Log Out", key="logout_btn", disabled=form.loading):
            with st.spinner("Loading..."):
                form.submit_logout()
            form.reset()
            st.rerun()

    if form.message is not None and form.message.is_error:
        render_status(form.message)
