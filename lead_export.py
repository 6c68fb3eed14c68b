import pandas as pd

EXPORT_COLUMNS = ["Name", "Website", "Rating", "Issue", "Action", "Description"]


def leads_to_dataframe(leads):
    """Builds the table shown in list view and used for the CSV export."""
    rows = [
        {
            "Name": lead.name,
            "Website": lead.website_href,
            "Rating": lead.rating,
            "Issue": lead.issue,
            "Action": lead.action,
            "Description": lead.description,
        }
        for lead in leads
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def leads_to_csv(leads):
    return leads_to_dataframe(leads).to_csv(index=False).encode("utf-8")


def export_file_name(params):
    return f"leads_{params.location}_{params.niche}".replace(" ", "_").replace(",", "") + ".csv"
