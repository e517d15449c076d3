"""Report sink — fire-and-forget single-row insert, no reads, no retry."""
import logging

from sqlalchemy.orm import Session

from eventroster.errors import InvalidArgument
from eventroster.models.report import Report, ReportType

logger = logging.getLogger(__name__)


def submit_report(db: Session, reporter_id: str, report_type: str, target_id: str, reason: str) -> Report:
    try:
        rtype = ReportType(report_type)
    except ValueError:
        raise InvalidArgument(f"Invalid report type: {report_type}")
    if not target_id or not (reason or "").strip():
        raise InvalidArgument("target_id and reason are required")

    report = Report(type=rtype, target_id=target_id, reporter_id=reporter_id, reason=reason.strip())
    db.add(report)
    db.commit()
    logger.info("Report %s filed by %s on %s %s", report.report_id, reporter_id, rtype.value, target_id)
    return report
