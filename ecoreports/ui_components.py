"""Shared UI components: report headers, method boxes, callouts."""
import streamlit as st


def report_header(title, subtitle=None):
    """Render a report title with an optional caption above it."""
    if subtitle:
        st.caption(subtitle)
    st.title(title)
    st.divider()


def concept_box(title, content):
    """Render a shaded box describing the data or method behind a section."""
    st.markdown(f"""
<div style="background-color: #EEF6F3; padding: 16px 20px; border-radius: 8px; border-left: 5px solid #2A9D8F; margin: 8px 0 16px 0;">
<h4 style="color: #264653; margin: 0 0 6px 0;">{title}</h4>
<p style="color: #264653; margin: 0;">{content}</p>
</div>
""", unsafe_allow_html=True)


def formula_box(title, formula, note=""):
    """Render a labelled LaTeX equation, with an optional note underneath."""
    st.markdown(f"**{title}**")
    st.latex(formula)
    if note:
        st.caption(note)


def insight_box(text):
    """Render a finding drawn from the current data."""
    st.success(f"**Finding:** {text}")


def warning_box(text):
    """Render a caveat the reader should weigh before trusting a result."""
    st.warning(f"**Caveat:** {text}")


def takeaways(points):
    """Render the report's closing notes as a bulleted list."""
    st.subheader("Notes on Method")
    st.markdown("\n".join(f"- {p}" for p in points))
