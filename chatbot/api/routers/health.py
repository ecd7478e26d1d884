from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends

from chatbot.api.dependencies import (
    get_app_settings,
    get_document_store,
    get_request_logger_dependency
)
from chatbot.config import Settings
from chatbot.domain.interfaces.document_store import DocumentStore
from chatbot.utils.logger import LoggerAdapter

router = APIRouter(prefix="/health")


def _service_status(settings: Settings, state: str) -> Dict[str, Any]:
    return {
        "status": state,
        "service": settings.SERVICE_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("", summary="Liveness check")
def get_health(settings: Settings = Depends(get_app_settings)) -> Dict[str, Any]:
    """Report that the process is up without touching the document store."""
    return _service_status(settings, "ok")


@router.get("/detailed", summary="Readiness check")
def get_detailed_health(
    settings: Settings = Depends(get_app_settings),
    document_store: DocumentStore = Depends(get_document_store),
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> Dict[str, Any]:
    """
    Report service status together with the document store status.

    The response is always 200; an unreachable store turns the overall
    status into "degraded".
    """
    store_status = document_store.health_check()
    if store_status["status"] != "ok":
        logger.warning("Document store health check failed", extra={"store": store_status})

    report = _service_status(settings, "ok" if store_status["status"] == "ok" else "degraded")
    report["dependencies"] = {"document_store": store_status}
    return report
