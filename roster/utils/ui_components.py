import logging
import os
from typing import Optional

import streamlit as st

from roster.models import StatusMessage

logger = logging.getLogger(__name__)

CSS_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), "styles", "roster.css")


def inject_css(path: str = CSS_PATH):
    """Injects the roster stylesheet; the app still works unstyled without it."""
    try:
        with open(path) as f:
            st.markdown(f"<style>{f.read()}</style>", unsafe_allow_html=True)
    except FileNotFoundError:
        logger.warning("Could not find %s. UI will be unstyled.", path)


def render_status(message: Optional[StatusMessage]):
    """Shows the outcome of the last operation with a matching alert box."""
    if message is None or not message.text:
        return

    renderers = {
        "success": st.success,
        "warning": st.warning,
        "error": st.error,
    }
    renderers.get(message.level, st.info)(message.text)


def render_class_title(title: str, count: int):
    st.subheader(f"Class: {title}")
    st.caption(f"👥 {count} student(s)")
