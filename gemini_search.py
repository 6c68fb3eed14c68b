import enum
import logging

from lead_models import GroundingSource, SearchParams, SearchResult
from lead_parser import LEAD_DELIMITER, parse_leads
from settings import DEFAULT_MODEL_NAME

logger = logging.getLogger(__name__)

# --- Configuration ---
MIN_LEADS = 5
MAX_LEADS = 7
GROUNDING_TOOLS = [{"google_search": {}}, {"google_maps": {}}]

RATE_LIMIT_MESSAGE = (
    "API Rate Limit Exceeded. The system is currently receiving too many requests. "
    "Please wait a moment and try again."
)
GENERIC_ERROR_MESSAGE = "An unexpected error occurred while connecting to Google Gemini."

RATE_LIMIT_MARKERS = ("429", "quota", "resource_exhausted")


# --- Errors ---
class ErrorKind(enum.Enum):
    RATE_LIMITED = "rate_limited"
    UNKNOWN = "unknown"


class QueryError(Exception):
    """A failed lead search, reduced to a display-ready message."""

    kind = ErrorKind.UNKNOWN

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class RateLimitedError(QueryError):
    kind = ErrorKind.RATE_LIMITED


class UnknownQueryError(QueryError):
    kind = ErrorKind.UNKNOWN


def _is_rate_limited(exc):
    for attr in ("code", "status_code"):
        if getattr(exc, attr, None) == 429:
            return True

    status = getattr(exc, "status", None)
    if status == 429 or (isinstance(status, str) and status.upper() == "RESOURCE_EXHAUSTED"):
        return True

    # The SDK does not always populate the structured fields, so check the text too
    error_str = f"{getattr(exc, 'message', '') or ''} {exc}".lower()
    return any(marker in error_str for marker in RATE_LIMIT_MARKERS)


def classify_error(exc):
    """Maps any upstream failure onto RateLimitedError or UnknownQueryError."""
    if isinstance(exc, QueryError):
        return exc
    if _is_rate_limited(exc):
        return RateLimitedError(RATE_LIMIT_MESSAGE)

    message = getattr(exc, "message", None)
    if not isinstance(message, str) or not message.strip():
        message = str(exc)
    return UnknownQueryError(message.strip() or GENERIC_ERROR_MESSAGE)


# --- Prompt ---
def build_prompt(params):
    """Constructs the instruction string for the model."""
    return f"""
Find {MIN_LEADS}-{MAX_LEADS} real estate businesses (agents, agencies, property managers) in "{params.location}" related to "{params.niche}" that might need SEO services.
Use Google Maps to verify they exist and Google Search to analyze their digital presence.

Look for businesses that:
1. Have low ratings or few reviews on Maps.
2. Do not have a website listed, or have a website that appears outdated or hard to find.
3. Are not ranking at the top of search results for their main keywords.

Strictly format your response as a list of text blocks.
Do NOT use JSON or markdown tables.
Use exactly this format for each lead found:

{LEAD_DELIMITER}
Name: [Business Name]
URL: [Website URL or "None"]
Rating: [Google Maps Rating/Review Count or "N/A"]
Issue: [One sentence explaining the SEO weakness]
Action: [One specific service to pitch, e.g., "Website Redesign", "Local SEO", "Reputation Management"]
Description: [A brief 1-2 sentence overview of the business status found via search]

If you cannot find specific details, write "N/A".
""".strip()


# --- Response handling ---
def extract_sources(response):
    """Collects web citations from the first candidate's grounding metadata."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []

    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    sources = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        if not uri:
            continue
        sources.append(GroundingSource(title=getattr(web, "title", None) or uri, url=uri))
    return sources


class LeadSearchClient:
    """Runs grounded lead searches against a google-genai client."""

    def __init__(self, client, model=DEFAULT_MODEL_NAME):
        self.client = client
        self.model = model

    def search(self, params):
        prompt = build_prompt(params)
        logger.info("Searching leads: location=%r niche=%r model=%s", params.location, params.niche, self.model)

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config={"tools": GROUNDING_TOOLS},
            )
            text = response.text or ""
            sources = extract_sources(response)
        except Exception as e:
            logger.exception("Gemini API error")
            raise classify_error(e) from e

        leads = parse_leads(text)
        if text and not leads:
            logger.warning("Model reply did not contain any parseable leads (%d chars)", len(text))
        logger.info("Search finished: %d leads, %d sources", len(leads), len(sources))

        return SearchResult(leads=leads, raw_text=text, sources=sources)


def find_leads(client, location, niche):
    """Convenience wrapper: search(location, niche) -> SearchResult."""
    return client.search(SearchParams(location=location, niche=niche))
