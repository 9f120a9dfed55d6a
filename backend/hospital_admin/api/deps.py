from fastapi import Request

from ..services.report_generator import ReportHistory
from ..store.store import AppStore


def get_store(request: Request) -> AppStore:
    return request.app.state.store


def get_report_history(request: Request) -> ReportHistory:
    return request.app.state.report_history
