from __future__ import annotations

import io
import json
from collections.abc import Sequence
from dataclasses import asdict

import pandas as pd

from ..application.api import TeamSummary, results_frame, summarize_team_results
from ..domain.enums import Metric
from ..domain.models import AssessmentResult
from ..infrastructure.exceptions import ExportError
from ..infrastructure.logging import get_logger

logger = get_logger(__name__)

RESULT_COLUMNS = ["AssessmentID", "UserID", "Family", "Type", "Overall%", "CompletedAt"] + [
    m.name for m in Metric
]


def _to_iso(val):
    if hasattr(val, "isoformat"):
        try:
            return val.isoformat()
        except Exception:
            return str(val)
    return val


def make_json_export_payload(
    organization_id: str,
    results: Sequence[AssessmentResult],
    summary: TeamSummary | None = None,
) -> str:
    summary = summary or summarize_team_results(results)
    results_df = results_frame(results)
    payload = {
        "organization_id": organization_id,
        "summary": asdict(summary),
        "results": results_df.map(_to_iso).to_dict(orient="records"),
    }
    return json.dumps(payload, indent=2)


def make_xlsx_export_bytes(
    results: Sequence[AssessmentResult], summary: TeamSummary | None = None
) -> bytes:
    """Create an Excel workbook with a per-result sheet and a team summary sheet."""

    summary = summary or summarize_team_results(results)
    results_df = results_frame(results)
    for column in RESULT_COLUMNS:
        if column not in results_df.columns:
            results_df[column] = pd.NA
    results_df = results_df[RESULT_COLUMNS].copy()
    # Excel cannot store timezone-aware datetimes
    results_df["CompletedAt"] = results_df["CompletedAt"].map(_to_iso)

    summary_df = pd.DataFrame(
        {
            "Metric": [m.name for m in Metric],
            "Average": [summary.metric_averages.get(m.name) for m in Metric],
            "Percentage": [summary.metric_percentages.get(m.name) for m in Metric],
        }
    )

    bio = io.BytesIO()
    try:
        with pd.ExcelWriter(bio, engine="xlsxwriter") as writer:
            results_df.to_excel(writer, index=False, sheet_name="Results")
            summary_df.to_excel(writer, index=False, sheet_name="Team Summary")
    except Exception as e:
        logger.error(f"XLSX export failed: {e}")
        raise ExportError(str(e), export_format="xlsx") from e
    return bio.getvalue()
