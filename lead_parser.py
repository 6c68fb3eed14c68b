import logging
import re

from lead_models import (
    DEFAULT_ACTION,
    DEFAULT_DESCRIPTION,
    DEFAULT_ISSUE,
    DEFAULT_RATING,
    DEFAULT_URL,
    Lead,
)

logger = logging.getLogger(__name__)

LEAD_DELIMITER = "### LEAD"


def _field_pattern(key):
    # Case-sensitive, anchored at line start, value runs to end of line
    return re.compile(rf"^[ \t]*{key}:[ \t]*(.*?)[ \t]*$", re.MULTILINE)


FIELD_PATTERNS = {
    "name": _field_pattern("Name"),
    "url": _field_pattern("URL"),
    "rating": _field_pattern("Rating"),
    "issue": _field_pattern("Issue"),
    "action": _field_pattern("Action"),
    "description": _field_pattern("Description"),
}

FIELD_DEFAULTS = {
    "url": DEFAULT_URL,
    "rating": DEFAULT_RATING,
    "issue": DEFAULT_ISSUE,
    "action": DEFAULT_ACTION,
    "description": DEFAULT_DESCRIPTION,
}


def extract_field(block, key):
    """Returns the trimmed value of the first `Key: value` line, or None."""
    match = FIELD_PATTERNS[key].search(block)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def parse_block(block, index):
    """Parses one lead block. Blocks without a Name are not leads and yield None."""
    name = extract_field(block, "name")
    if not name:
        return None

    values = {}
    for key, default in FIELD_DEFAULTS.items():
        value = extract_field(block, key)
        values[key] = value if value is not None else default

    return Lead(id=f"lead-{index}", name=name, **values)


def parse_leads(text):
    """Converts the model's text reply into a list of Lead records.

    The reply is split on the lead delimiter and everything before the first
    delimiter is ignored. Each block is then scanned for its fields one by one,
    so field order inside a block does not matter. Malformed blocks are dropped
    instead of raising, which means a reply that ignores the template simply
    produces no leads.
    """
    if not text:
        return []

    leads = []
    blocks = text.split(LEAD_DELIMITER)

    # Index 0 is the preamble; ids keep the split position even when blocks are skipped
    for index, block in enumerate(blocks[1:], start=1):
        if not block.strip():
            continue

        lead = parse_block(block, index)
        if lead is None:
            logger.debug("Dropping block %d without a Name line", index)
            continue
        leads.append(lead)

    return leads
