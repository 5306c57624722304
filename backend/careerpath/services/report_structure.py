from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
from typing import Any

from careerpath.schemas.report import REPORT_SECTIONS, CareerAnalysisReport

logger = logging.getLogger(__name__)

# Older prompt versions used different names for some sections.
SECTION_ALIASES = {
    "gapAnalysis": "skillGapAnalysis",
    "pathwayOptions": "careerPathwayOptions",
    "educationPrograms": "educationalPrograms",
    "similarRolesToConsider": "similarRoles",
    "microLearningTips": "quickTips",
    "skillGrowthTrajectory": "growthTrajectory",
}


def _unwrap(raw: Any) -> dict[str, Any]:
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="ignore")
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Report payload is not valid JSON; using empty report")
            return {}
    if not isinstance(raw, dict):
        return {}
    nested = raw.get("report")
    if isinstance(nested, dict) and "executiveSummary" not in raw:
        return nested
    return raw


def _with_current_names(raw: Any) -> dict[str, Any]:
    data = dict(_unwrap(raw))
    for legacy, current in SECTION_ALIASES.items():
        if legacy in data and current not in data:
            data[current] = data.pop(legacy)
    return data


def structure_report(raw: Any) -> dict[str, Any]:
    """Return a report with every section present, whatever ``raw`` holds.

    Accepts a dict, a JSON string, or a ``{"report": {...}}`` envelope.
    Wrong-typed sections become empty sections; this never raises.
    """
    data = _with_current_names(raw)
    absent = missing_sections(data)
    if absent:
        logger.info("Report is missing %d section(s): %s", len(absent), ", ".join(absent))

    report = CareerAnalysisReport.model_validate(data)
    if not report.timestamp:
        report.timestamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    return report.to_wire()


def missing_sections(raw: Any) -> list[str]:
    data = _with_current_names(raw)
    return [section for section in REPORT_SECTIONS if not isinstance(data.get(section), dict)]
