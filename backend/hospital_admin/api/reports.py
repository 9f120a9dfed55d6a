"""Reports API: template catalogue, generation and recent history."""
from dataclasses import asdict

from fastapi import APIRouter, Depends

from ..services.report_generator import REPORT_TEMPLATES, ReportHistory, report_generator
from ..store.store import AppStore
from .deps import get_report_history, get_store

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/templates")
def list_templates():
    return [asdict(t) for t in REPORT_TEMPLATES]


@router.get("/recent")
def recent_reports(history: ReportHistory = Depends(get_report_history)):
    return [asdict(entry) for entry in history.entries()]


@router.post("/{template_id}")
def generate(
    template_id: str,
    store: AppStore = Depends(get_store),
    history: ReportHistory = Depends(get_report_history),
):
    """
    Generate a report from the current collections.
    Unknown template ids produce an empty report, not an error.
    """
    result = report_generator.generate(template_id, store.snapshot())
    history.record(result)
    return result.to_dict()
