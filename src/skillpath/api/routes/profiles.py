"""
Published Profile API Routes.

Routes for viewing a published Profile and downloading it as a report.
"""

from fastapi import APIRouter, Response, status
from fastapi.responses import JSONResponse

from skillpath.api.utils.state_helpers import gateway
from skillpath.utils.logger import get_logger
from skillpath.utils.report import report_filename, report_to_bytes

logger = get_logger(__name__)

router = APIRouter(prefix="/api/profiles", tags=["profiles"])

DOCX_MEDIA_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)


def _not_found() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "status": "not_found",
            "message": "Profile not found",
            "start_url": "/",
        },
    )


@router.get("/{share_id}")
def get_published_profile(share_id: str):
    """Return a published Profile snapshot.

    Returns:
        The snapshot, or 404 with {"status": "not_found", "message", "start_url"}
        so the viewer can offer to start a new assessment.
    """
    snapshot = gateway.fetch(share_id)
    if snapshot is None:
        return _not_found()
    return snapshot


@router.get("/{share_id}/report")
def download_report(share_id: str):
    """Return a published Profile as a Word document."""
    snapshot = gateway.fetch(share_id)
    if snapshot is None:
        return _not_found()

    filename = report_filename(snapshot)
    logger.info(
        "Returning profile report",
        extra={"extra_fields": {"share_id": share_id, "report_filename": filename}},
    )
    return Response(
        content=report_to_bytes(snapshot),
        media_type=DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
