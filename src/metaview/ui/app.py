import streamlit as st

from metaview.config import settings
from metaview.logger import ensure_logging, get_logger
from metaview.meta.client import MetaClient
from metaview.meta.controller import PageController
from metaview.meta.models import PagePhase, ViewMode
from metaview.ui.sections import render_section

PAGE_KEY = "metaview_page"

st.set_page_config(page_title="Meta Components", page_icon="🗂️", layout="wide")


# Configured once per process; reruns and new sessions reuse the handlers
ensure_logging(level=settings.log_level, log_dir=settings.log_dir, timezone=settings.log_timezone)
logger = get_logger(__name__)


def _new_page(view: ViewMode) -> PageController:
    client = MetaClient.from_settings(settings)
    return PageController(fetch=client.fetch, view=view)


def _reload() -> None:
    """Drop the current page (and its in-flight load) and mount a fresh one."""
    old = st.session_state.pop(PAGE_KEY, None)
    view = ViewMode(settings.default_view)
    if old is not None:
        old.dispose()
        view = old.view
    logger.info("Reload requested; mounting a new page")
    st.session_state[PAGE_KEY] = _new_page(view)


# One controller per browser session; reruns reuse it and never re-fetch
if PAGE_KEY not in st.session_state:
    st.session_state[PAGE_KEY] = _new_page(ViewMode(settings.default_view))
page: PageController = st.session_state[PAGE_KEY]

# Sidebar
st.sidebar.title("Settings")
st.sidebar.markdown(f"**Data source:** `{settings.meta_endpoint}`")
st.sidebar.button("Reload data", key="reload_data", on_click=_reload)
st.sidebar.markdown("---")
st.sidebar.write("Usage:")
st.sidebar.code(
    """
# 1) Start the development data source
uvicorn metaview.api.server:app --reload

# 2) Start UI
streamlit run src/metaview/ui/app.py
    """
)

# Header with view toggle
title_col, table_col, cards_col = st.columns([6, 1, 1])
with title_col:
    st.title("Meta Components")
    st.caption("Dynamic sections from third-party JSON. Columns: **Component** & **TCM ID**.")
for col, mode in ((table_col, ViewMode.TABLE), (cards_col, ViewMode.CARDS)):
    with col:
        active = page.view is mode
        st.button(
            mode.label,
            key=f"view_{mode.value}",
            type="primary" if active else "secondary",
            disabled=active,
            on_click=page.set_view,
            args=(mode,),
        )

st.subheader("Component / TCM ID Mapping")

# Status
status_ph = st.empty()
if page.phase is PagePhase.UNINITIALIZED:
    status_ph.info(page.status_text())
    with st.spinner("Fetching meta components..."):
        page.mount()

if page.is_loading:
    status_ph.info(page.status_text())
else:
    status_ph.success(page.status_text())

if page.advisory:
    st.warning(page.advisory)

# Sections
if not page.groups and not page.is_loading:
    st.caption("No sections found.")
for group_name, rows in page.groups.items():
    render_section(
        group_name,
        rows,
        page.view,
        page.sections.get(group_name),
        key=f"section_{group_name}",
    )
