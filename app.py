import logging

import streamlit as st
from google import genai

from gemini_search import LeadSearchClient, QueryError
from lead_export import export_file_name, leads_to_csv, leads_to_dataframe
from lead_models import SearchParams
from settings import Settings, configure_logging

settings = Settings()
configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# --- Streamlit Setup ---
st.set_page_config(
    page_title="EstateRank AI",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.title("EstateRank AI")
st.caption("Live Google Search & Maps data to find real estate businesses with untapped SEO potential. Powered by Google Gemini.")

# --- Session State Management ---
if 'result' not in st.session_state:
    st.session_state.result = None
if 'error' not in st.session_state:
    st.session_state.error = None
if 'last_params' not in st.session_state:
    st.session_state.last_params = None


# --- API Initialization ---
@st.cache_resource
def get_search_client():
    """Initializes the Gemini client once per process."""
    try:
        client = genai.Client(api_key=settings.require_api_key())
        return LeadSearchClient(client, model=settings.GEMINI_MODEL)
    except Exception as e:
        logger.exception("Could not initialize Gemini client")
        st.error(f"Error initializing Gemini client: {e}")
        st.stop()


search_client = get_search_client()


# --- Actions ---
def run_search(params):
    """Runs one search and stores the outcome in session state."""
    st.session_state.last_params = params
    st.session_state.error = None
    st.session_state.result = None

    with st.spinner(f"Scanning {params.location} for {params.niche} leads..."):
        try:
            st.session_state.result = search_client.search(params)
        except QueryError as e:
            st.session_state.error = e.message


def search_leads():
    location = st.session_state.location_input.strip()
    niche = st.session_state.niche_input.strip()

    if not location or not niche:
        st.session_state.error = "Please enter both a Target Location and a Business Type."
        return

    run_search(SearchParams(location=location, niche=niche))


def retry_search():
    if st.session_state.last_params is not None:
        run_search(st.session_state.last_params)


# --- Rendering ---
def render_lead_card(lead):
    with st.container(border=True):
        st.subheader(lead.name)
        st.caption(f"⭐ {lead.rating}")
        st.write(lead.description)
        st.markdown(f"**Problem:** {lead.issue}")
        st.markdown(f"**Opportunity:** {lead.action}")
        if lead.has_website:
            st.link_button("Visit Website", lead.website_href)
        else:
            st.caption("No Website")


def render_sources(sources):
    st.markdown("---")
    st.subheader("Verified Data Sources")
    links = []
    for source in sources:
        icon = f"![](https://www.google.com/s2/favicons?domain={source.domain})" if source.domain else ""
        links.append(f"- {icon} [{source.title}]({source.url})")
    st.markdown("\n".join(links))


# --- UI Layout ---

# Sidebar for controls
with st.sidebar:
    st.header("Search Parameters")

    st.text_input(
        "Target Location (e.g., Austin, TX)",
        key="location_input",
    )

    st.text_input(
        "Business Type (e.g., Luxury Condos, Commercial Real Estate)",
        key="niche_input",
    )

    st.button("Find Leads", on_click=search_leads, type="primary")

    st.markdown("---")
    view_mode = st.radio("View", options=["Grid", "List"], horizontal=True)


# Main Content Area
result = st.session_state.result

if st.session_state.error:
    st.error(st.session_state.error)
    if st.session_state.last_params is not None:
        st.button("Try Again", on_click=retry_search)

if result is None or (not result.leads and not result.raw_text):
    if not st.session_state.error:
        if result is None:
            st.info("Enter a location and niche in the sidebar and click 'Find Leads' to begin scanning.")
        else:
            st.warning("The model returned an empty response. Try a different query.")
else:
    st.header(f"Identified Leads ({len(result.leads)})")

    if result.leads:
        st.download_button(
            label=f"Export {len(result.leads)} Leads to CSV",
            data=leads_to_csv(result.leads),
            file_name=export_file_name(st.session_state.last_params),
            mime='text/csv',
        )

        if view_mode == "Grid":
            columns = st.columns(3)
            for i, lead in enumerate(result.leads):
                with columns[i % 3]:
                    render_lead_card(lead)
        else:
            st.dataframe(
                leads_to_dataframe(result.leads),
                hide_index=True,
                column_config={"Website": st.column_config.LinkColumn("Website")},
            )
    else:
        # Reply did not follow the lead template; show it as-is
        st.subheader("Raw Analysis")
        st.text(result.raw_text)

    if result.sources:
        render_sources(result.sources)
