import logging

import streamlit as st

from shared.backend import create_backend_client
from shared.config import configure_logging, load_settings
from roster.auth_ui import render_login_page
from roster.roster_ui import render_roster_page
from roster.services.app_services import RosterServices, build_services
from roster.services.session_gate import ROSTER_VIEW
from roster.utils.ui_components import inject_css

logger = logging.getLogger(__name__)


def get_services(settings) -> RosterServices:
    """One backend client per browser session, kept across reruns."""
    if "roster_services" not in st.session_state:
        logger.info("New browser session, building services")
        client = create_backend_client(settings)
        st.session_state.roster_services = build_services(client)
    return st.session_state.roster_services


def main():
    settings = load_settings()
    configure_logging(settings.log_level)

    st.set_page_config(page_title=settings.page_title, page_icon="🎓", layout="centered")
    inject_css()

    services = get_services(settings)

    with services.gate.listening() as gate:
        if gate.view == ROSTER_VIEW:
            render_roster_page(services.roster, services.credentials, gate.session)
        else:
            services.roster.sync_session(None)
            render_login_page(services.credentials)


if __name__ == "__main__":
    main()
