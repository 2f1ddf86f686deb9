# subpages/contact_page.py
# ----------------------------------------------------------
# Contact form. Submitting builds a mailto: link from the fields
# and hands it to the visitor's mail client.
# ----------------------------------------------------------

from __future__ import annotations
import json
import logging

import streamlit as st
from streamlit.components.v1 import html as st_html

from portfolio.config import SiteConfig
from portfolio.contact import build_mailto_url

logger = logging.getLogger(__name__)


def open_url(url: str):
    st_html(
        f"""
<script>
try {{ window.parent.location.href = {json.dumps(url)}; }} catch(e) {{}}
</script>
""",
        height=0,
    )


def contact_page(cfg: SiteConfig):
    st.title("Contact")
    if not cfg.email:
        st.info("Set [site] email in site.toml to enable the contact form.")
        return

    with st.form("contact"):
        sender = st.text_input("Email")
        subject = st.text_input("Subject")
        body = st.text_area("Message")
        submitted = st.form_submit_button("Submit")

    if submitted:
        fields = [("subject", subject), ("body", f"{body}\n\n— {sender}" if sender else body)]
        url = build_mailto_url(f"mailto:{cfg.email}", fields)
        logger.info("Opening mail client for contact form")
        open_url(url)
        st.link_button("Open in your mail app", url)
