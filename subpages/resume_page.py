# subpages/resume_page.py
# ----------------------------------------------------------
# Resume: short written summary + optional PDF preview.
# PDF pages are rasterised with PyMuPDF and revealed in chunks.
# ----------------------------------------------------------

from __future__ import annotations
from pathlib import Path

import streamlit as st

from portfolio.config import SiteConfig

SECTIONS = {
    "Education": [
        "B.S. Data Science, University of California San Diego",
    ],
    "Experience": [
        "Data visualization and front-end projects (see Projects)",
        "Teaching assistant, introductory programming",
    ],
    "Skills": [
        "Python, pandas, SQL",
        "JavaScript, D3, HTML/CSS",
        "Git, Streamlit, Plotly",
    ],
}


@st.cache_data(show_spinner=False)
def _page_jpeg(pdf_path_str: str, page_index: int, dpi: int, quality: int) -> bytes:
    import fitz  # PyMuPDF
    doc = fitz.open(pdf_path_str)
    try:
        mat = fitz.Matrix(dpi/72, dpi/72)
        page = doc.load_page(page_index)
        pix = page.get_pixmap(matrix=mat, colorspace=fitz.csRGB, alpha=False)
        return pix.tobytes("jpeg", jpg_quality=quality)
    finally:
        doc.close()


def show_pdf_pages(pdf_path: Path, dpi: int = 105, quality: int = 70, chunk_size: int = 2, key_prefix: str = "resume"):
    import fitz
    with fitz.open(str(pdf_path)) as d:
        n_pages = d.page_count
    st.caption(f"{pdf_path.name} · {n_pages} pages")

    shown_key = f"{key_prefix}_shown"
    if shown_key not in st.session_state:
        st.session_state[shown_key] = min(chunk_size, n_pages)
    shown = st.session_state[shown_key]

    for i in range(shown):
        st.image(_page_jpeg(str(pdf_path), i, dpi, quality), caption=f"Page {i+1}/{n_pages}", use_container_width=True)

    if shown < n_pages:
        if st.button(f"Show next {min(chunk_size, n_pages-shown)} pages", key=f"{key_prefix}_more", use_container_width=True):
            st.session_state[shown_key] = min(shown + chunk_size, n_pages)
            st.rerun()


def resume_page(cfg: SiteConfig):
    st.title("Resume")
    for heading, items in SECTIONS.items():
        st.subheader(heading)
        st.markdown("\n".join(f"- {item}" for item in items))

    pdf = cfg.resume_pdf
    if pdf is None:
        return
    st.markdown("---")
    if not pdf.exists():
        st.error(f"Missing PDF at: {pdf}")
        return
    st.download_button("⬇️  Resume (PDF)", data=pdf.read_bytes(), file_name=pdf.name, use_container_width=True)
    show_pdf_pages(pdf)
