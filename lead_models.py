from dataclasses import dataclass, field, asdict
from typing import List
from urllib.parse import urlparse

# --- Defaults for missing lead fields ---
DEFAULT_URL = "N/A"
DEFAULT_RATING = "N/A"
DEFAULT_ISSUE = "Unknown Issue"
DEFAULT_ACTION = "General SEO"
DEFAULT_DESCRIPTION = "No description available."

# Values the model writes when a business has no website
NO_WEBSITE_SENTINELS = ("None", "N/A", "")


@dataclass
class Lead:
    """One prospective client extracted from a single lead block."""
    id: str
    name: str
    url: str = DEFAULT_URL
    rating: str = DEFAULT_RATING
    issue: str = DEFAULT_ISSUE
    action: str = DEFAULT_ACTION
    description: str = DEFAULT_DESCRIPTION

    @property
    def has_website(self) -> bool:
        return self.url.strip() not in NO_WEBSITE_SENTINELS

    @property
    def website_href(self) -> str:
        """Clickable link for the website, or an empty string when there is none."""
        if not self.has_website:
            return ""
        url = self.url.strip()
        return url if url.startswith("http") else f"https://{url}"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class GroundingSource:
    title: str
    url: str

    @property
    def domain(self) -> str:
        return urlparse(self.url).hostname or ""


@dataclass
class SearchParams:
    location: str
    niche: str


@dataclass
class SearchResult:
    leads: List[Lead] = field(default_factory=list)
    raw_text: str = ""
    sources: List[GroundingSource] = field(default_factory=list)
