"""Student Contacts Streamlit application.

Thin shell over RosterCoordinator: it renders whatever state the
coordinator holds and forwards user actions to it.
"""

import asyncio
import logging
import sys
from pathlib import Path

# Load environment variables from .env file BEFORE settings are read
from dotenv import load_dotenv
load_dotenv(Path(__file__).parent.parent / ".env")

import streamlit as st

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from contacts.config.settings import get_settings
from contacts.models.schemas import StudentRecord
from contacts.models.state import Error, Idle, Success
from contacts.services import RosterCoordinator

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _get_coordinator() -> RosterCoordinator:
    """One coordinator per browser session."""
    if "coordinator" not in st.session_state:
        logger.info(f"Creating coordinator for {settings.base_url}")
        st.session_state.coordinator = RosterCoordinator(settings=settings)
    return st.session_state.coordinator


def _run_load(coordinator: RosterCoordinator) -> None:
    with st.spinner("Loading students..."):
        asyncio.run(coordinator.load())


def render_roster(coordinator: RosterCoordinator) -> None:
    """Search box, status line and the filtered student list."""
    query = st.text_input(
        "Search",
        value=coordinator.query,
        placeholder="Name or roll number",
    )
    coordinator.set_query(query)

    state = coordinator.state
    if isinstance(state, Error):
        st.error(state.reason)
        if state.can_retry and st.button("Retry", type="primary"):
            _run_load(coordinator)
            st.rerun()

    if not coordinator.roster:
        if isinstance(state, Success):
            st.info("No students found.")
        return

    view = coordinator.filtered_view
    st.caption(f"{len(view)} of {len(coordinator.roster)} students")
    for record in view:
        st.button(
            f"{record.name}  ·  {record.roll_number}",
            key=f"student-{record.id}",
            on_click=coordinator.select,
            args=(record.id,),
            use_container_width=True,
        )


def render_detail(coordinator: RosterCoordinator, record: StudentRecord) -> None:
    """Detail view for the selected student."""
    st.button("← Back", on_click=coordinator.deselect)

    if st.button("Reload details"):
        with st.spinner("Loading student..."):
            fetched = asyncio.run(coordinator.load_detail(record.id))
        if fetched is None:
            st.warning("Could not load the latest details for this student.")

    detail = coordinator.detail
    if detail is not None and str(detail.id) == str(record.id):
        record = detail

    st.subheader(record.name)
    st.markdown(
        f"**Roll number:** {record.roll_number}  \n"
        f"**Department:** {record.department}  \n"
        f"**Email:** {record.email}  \n"
        f"**Address:** {record.address}  \n"
        f"**Lab:** {record.lab_name}  \n"
        f"**Accommodation:** {record.accommodation.value}"
    )


def main():
    """Main application entry point."""
    st.set_page_config(
        page_title=settings.APP_NAME,
        page_icon=settings.APP_ICON,
        layout="centered",
    )
    st.title(f"{settings.APP_ICON} {settings.APP_NAME}")

    coordinator = _get_coordinator()

    # Initial mount
    if isinstance(coordinator.state, Idle):
        _run_load(coordinator)

    if st.sidebar.button("Refresh"):
        _run_load(coordinator)
    st.sidebar.caption(f"v{settings.APP_VERSION}")

    selected = coordinator.selected
    if selected is not None:
        render_detail(coordinator, selected)
    else:
        render_roster(coordinator)


if __name__ == "__main__":
    main()
