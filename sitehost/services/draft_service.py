"""Campaign draft service — save, list, fetch, delete and export drafts.

Export formats:
    csv                — two-column Field,Value summary
    json               — campaign + copy + exportedAt timestamp
    google-ads-editor  — rows importable by Google Ads Editor

Exporting marks the draft "exported".
"""

import csv
import io
import json
import re
from datetime import datetime, timezone

from sitehost.extensions import db
from sitehost.models.campaign_draft import CampaignDraft

EXPORT_FORMATS = ("csv", "json", "google-ads-editor")

# Responsive search ads in the Editor sheet take at most three headlines here.
EDITOR_MAX_HEADLINES = 3
EDITOR_DEFAULT_BID = "1.00"


class DraftNotFound(LookupError):
    """No draft with that id for this owner."""


def save_draft(owner_id, name, campaign_data, generated_copy, industry=None):
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Name is required.")
    if industry is not None and not isinstance(industry, str):
        raise ValueError("Industry must be text.")
    name = name.strip()
    if not isinstance(campaign_data, dict) or not isinstance(generated_copy, dict):
        raise ValueError("campaign_data and generated_copy must be objects.")

    draft = CampaignDraft(
        owner_id=owner_id,
        name=name,
        industry=industry or None,
        campaign_data=campaign_data,
        generated_copy=generated_copy,
        status="draft",
    )
    db.session.add(draft)
    db.session.commit()
    return draft


def list_drafts(owner_id):
    return (
        CampaignDraft.query
        .filter_by(owner_id=owner_id)
        .order_by(CampaignDraft.updated_at.desc())
        .all()
    )


def get_draft(draft_id, owner_id):
    draft = CampaignDraft.query.filter_by(id=draft_id, owner_id=owner_id).first()
    if draft is None:
        raise DraftNotFound(draft_id)
    return draft


def delete_draft(draft_id, owner_id):
    draft = get_draft(draft_id, owner_id)
    db.session.delete(draft)
    db.session.commit()


def _rows_to_csv(rows):
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerows(rows)
    return buf.getvalue()


def _simple_csv(data, copy):
    return _rows_to_csv([
        ["Field", "Value"],
        ["Campaign Type", data.get("type", "")],
        ["Brand", data.get("brand", "")],
        ["URL", data.get("url", "")],
        ["Daily Budget", data.get("budgetDaily", "")],
        ["Keywords", "; ".join(data.get("keywords", []))],
        ["Languages", ", ".join(data.get("languages", []))],
        ["Headlines", "; ".join(copy.get("headlines", []))],
        ["Descriptions", "; ".join(copy.get("descriptions", []))],
    ])


def _editor_csv(data, copy, today):
    campaign_name = f"{data.get('brand', '')} – {data.get('type', '')} – {today}"
    if data.get("campaignNameSuffix"):
        campaign_name += f" {data['campaignNameSuffix']}"

    rows = [
        ["Type", "Name", "Status", "Campaign Type", "Budget", "Final URL", "Languages"],
        [
            "Campaign",
            campaign_name,
            "Enabled",
            "Search",
            data.get("budgetDaily", ""),
            data.get("url", ""),
            ",".join(data.get("languages", [])),
        ],
        ["Ad Group", "Main Ad Group", "Enabled"],
    ]
    for keyword in data.get("keywords", []):
        rows.append(["Keyword", keyword, "Enabled", "Exact", EDITOR_DEFAULT_BID])
    for headline in copy.get("headlines", [])[:EDITOR_MAX_HEADLINES]:
        rows.append(["Ad", headline, "Enabled", "Responsive Search Ad"])
    return _rows_to_csv(rows)


def _safe_filename(name):
    return re.sub(r"[^a-zA-Z0-9]", "_", name)


def export_draft(draft_id, owner_id, fmt):
    """Render a draft in the requested format and mark it exported.

    Returns a dict: {data, filename, content_type}.
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(
            f"Invalid export format '{fmt}'. Must be one of: {', '.join(EXPORT_FORMATS)}"
        )

    draft = get_draft(draft_id, owner_id)
    data = draft.campaign_data or {}
    copy = draft.generated_copy or {}
    now = datetime.now(timezone.utc)
    base = _safe_filename(draft.name)

    if fmt == "google-ads-editor":
        export = {
            "data": _editor_csv(data, copy, now.date().isoformat()),
            "filename": f"{base}_google_ads.csv",
            "content_type": "text/csv",
        }
    elif fmt == "csv":
        export = {
            "data": _simple_csv(data, copy),
            "filename": f"{base}_campaign.csv",
            "content_type": "text/csv",
        }
    else:
        export = {
            "data": json.dumps(
                {"campaign": data, "copy": copy, "exportedAt": now.isoformat()},
                indent=2,
            ),
            "filename": f"{base}_campaign.json",
            "content_type": "application/json",
        }

    draft.status = "exported"
    draft.updated_at = now
    db.session.commit()
    return export
