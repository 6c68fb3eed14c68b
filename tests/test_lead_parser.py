"""
Unit tests for the lead parser.

Tests cover:
- Blocks without a Name line are dropped
- Defaults for missing fields
- Field order independence inside a block
- Delimiter splitting and positional ids
- Whitespace-only blocks and preamble text
"""
import pytest

from lead_models import Lead
from lead_parser import LEAD_DELIMITER, extract_field, parse_leads


FULL_BLOCK = """
Name: Hillside Homes Realty
URL: hillsidehomes.com
Rating: 3.8 (12 reviews)
Issue: Website is not mobile friendly and loads slowly.
Action: Website Redesign
Description: Small family agency with an outdated site.
"""


def _reply(*blocks, preamble="Here are the leads I found:\n"):
    return preamble + "".join(f"{LEAD_DELIMITER}\n{block}\n" for block in blocks)


class TestNameGating:
    @pytest.mark.unit
    def test_block_without_name_is_dropped(self):
        block = "URL: example.com\nRating: 4.1\nIssue: Few reviews\nAction: Local SEO\nDescription: Agency"
        assert parse_leads(_reply(block)) == []

    @pytest.mark.unit
    def test_empty_name_value_is_dropped(self):
        assert parse_leads(_reply("Name:   \nURL: example.com")) == []

    @pytest.mark.unit
    def test_nameless_block_does_not_affect_neighbors(self):
        leads = parse_leads(_reply("Name: First", "Issue: orphan", "Name: Third"))
        assert [lead.name for lead in leads] == ["First", "Third"]

    @pytest.mark.unit
    def test_business_name_label_is_not_a_name(self):
        assert parse_leads(_reply("Business Name: Not Anchored")) == []


class TestDefaults:
    @pytest.mark.unit
    def test_name_only_block_gets_defaults(self):
        leads = parse_leads(_reply("Name: Acme Realty"))
        assert leads == [
            Lead(
                id="lead-1",
                name="Acme Realty",
                url="N/A",
                rating="N/A",
                issue="Unknown Issue",
                action="General SEO",
                description="No description available.",
            )
        ]

    @pytest.mark.unit
    def test_full_block_values_are_trimmed(self):
        lead = parse_leads(_reply("Name:   Hillside Homes Realty   \nURL:\thillsidehomes.com  "))[0]
        assert lead.name == "Hillside Homes Realty"
        assert lead.url == "hillsidehomes.com"

    @pytest.mark.unit
    def test_full_block(self):
        lead = parse_leads(_reply(FULL_BLOCK))[0]
        assert lead.url == "hillsidehomes.com"
        assert lead.rating == "3.8 (12 reviews)"
        assert lead.issue == "Website is not mobile friendly and loads slowly."
        assert lead.action == "Website Redesign"
        assert lead.description == "Small family agency with an outdated site."


class TestFieldIndependence:
    @pytest.mark.unit
    def test_reordered_fields_parse_identically(self):
        reordered = """
Description: Small family agency with an outdated site.
Action: Website Redesign
Name: Hillside Homes Realty
Issue: Website is not mobile friendly and loads slowly.
Rating: 3.8 (12 reviews)
URL: hillsidehomes.com
"""
        assert parse_leads(_reply(reordered)) == parse_leads(_reply(FULL_BLOCK))

    @pytest.mark.unit
    def test_first_match_wins(self):
        lead = parse_leads(_reply("Name: One\nName: Two\nRating: 5\nRating: 1"))[0]
        assert lead.name == "One"
        assert lead.rating == "5"

    @pytest.mark.unit
    def test_keys_are_case_sensitive(self):
        lead = parse_leads(_reply("Name: Acme\nurl: acme.com"))[0]
        assert lead.url == "N/A"

    @pytest.mark.unit
    def test_value_stays_on_its_own_line(self):
        lead = parse_leads(_reply("Name: Acme\nIssue:\nAction: Local SEO"))[0]
        assert lead.issue == "Unknown Issue"
        assert lead.action == "Local SEO"

    @pytest.mark.unit
    def test_crlf_line_endings(self):
        lead = parse_leads(_reply("Name: Acme\r\nURL: acme.com\r\n"))[0]
        assert lead.name == "Acme"
        assert lead.url == "acme.com"


class TestSplitting:
    @pytest.mark.unit
    def test_three_delimiters_yield_three_ordered_leads(self):
        leads = parse_leads(_reply("Name: A", "Name: B", "Name: C"))
        assert [lead.name for lead in leads] == ["A", "B", "C"]
        ids = [int(lead.id.split("-")[1]) for lead in leads]
        assert ids == sorted(ids)
        assert len(set(ids)) == 3

    @pytest.mark.unit
    def test_preamble_is_ignored_even_with_name_line(self):
        text = "Name: Not A Lead\n" + _reply("Name: Real Lead", preamble="")
        assert [lead.name for lead in parse_leads(text)] == ["Real Lead"]

    @pytest.mark.unit
    def test_whitespace_block_is_skipped_and_ids_keep_position(self):
        text = f"{LEAD_DELIMITER}\nName: A\n{LEAD_DELIMITER}\n   \n\t\n{LEAD_DELIMITER}\nName: C\n"
        leads = parse_leads(text)
        assert [(lead.id, lead.name) for lead in leads] == [("lead-1", "A"), ("lead-3", "C")]

    @pytest.mark.unit
    def test_text_without_delimiter_yields_nothing(self):
        assert parse_leads("Name: Acme Realty\nURL: acme.com") == []

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["", None, "   ", LEAD_DELIMITER])
    def test_empty_input(self, text):
        assert parse_leads(text) == []


class TestExtractField:
    @pytest.mark.unit
    def test_missing_field_returns_none(self):
        assert extract_field("Name: Acme", "url") is None

    @pytest.mark.unit
    def test_indented_field_is_found(self):
        assert extract_field("    Rating: 4.5 (3 reviews)", "rating") == "4.5 (3 reviews)"
