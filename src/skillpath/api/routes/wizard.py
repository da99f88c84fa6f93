"""
Wizard Session API Routes.

Routes for creating a wizard session, filling the background form, answering
the assessment, reading the analysis, uploading attachments and publishing
the finished Profile.

Routes are plain functions: FastAPI runs them in its threadpool, so the
blocking LLM, DynamoDB and S3 calls do not stall the event loop.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, File, UploadFile, status
from fastapi.responses import JSONResponse

from skillpath.api.utils.state_helpers import get_controller, registry
from skillpath.config.request_schemas import (
    AnswerRequest,
    BackgroundForm,
    SelectOptionRequest,
)
from skillpath.utils.logger import get_logger, set_correlation_id
from skillpath.utils.skills import skills_as_text

logger = get_logger(__name__)

router = APIRouter(prefix="/api/sessions", tags=["wizard"])


# ------------------------------
# Session
# ------------------------------
@router.post("", status_code=status.HTTP_201_CREATED)
def create_session() -> JSONResponse:
    """Start a new wizard session on step 1 with the default Profile.

    Returns:
        JSONResponse (201) with the session view:
            {
                "session_id": "uuid-string",
                "profile": {...},
                "step": 1,
                "step_name": "Background",
                "total_steps": 7,
                "status": {"assessment": "idle", "analysis": "idle"}
            }
    """
    session_id, controller = registry.create()
    set_correlation_id(session_id=session_id)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=controller.view())


@router.get("/{session_id}")
def get_session(session_id: str) -> Dict[str, Any]:
    """Return the session view (Profile, step and step statuses)."""
    return get_controller(session_id).view()


@router.patch("/{session_id}/profile")
def patch_profile(session_id: str, partial: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """Shallow-merge arbitrary fields into the Profile."""
    controller = get_controller(session_id)
    controller.patch(partial)
    return controller.view()


@router.post("/{session_id}/reset")
def reset_session(session_id: str) -> Dict[str, Any]:
    """Discard the Profile and start over on step 1."""
    return get_controller(session_id).reset()


# ------------------------------
# Navigation
# ------------------------------
@router.post("/{session_id}/next")
def next_step(session_id: str) -> Dict[str, Any]:
    """Advance one step (stays on the last step)."""
    controller = get_controller(session_id)
    accepted = controller.next_step()
    return {"accepted": accepted, **controller.view()}


@router.post("/{session_id}/back")
def previous_step(session_id: str) -> Dict[str, Any]:
    """Go back one step (stays on step 1)."""
    controller = get_controller(session_id)
    accepted = controller.previous_step()
    return {"accepted": accepted, **controller.view()}


@router.post("/{session_id}/goto/{step}")
def go_to_step(session_id: str, step: int) -> Dict[str, Any]:
    """Jump to a step.

    An out-of-range step is not an error: the response carries
    "accepted": false and the unchanged view.
    """
    controller = get_controller(session_id)
    accepted = controller.go_to(step)
    return {"accepted": accepted, **controller.view()}


# ------------------------------
# Step 1: background
# ------------------------------
@router.get("/{session_id}/background")
def get_background(session_id: str) -> Dict[str, Any]:
    """Return the background form prefilled from the Profile.

    current_skills is rendered back to the comma-separated text the form uses.
    """
    profile = get_controller(session_id).view()["profile"]
    form = {key: profile.get(key) for key in BackgroundForm.model_fields}
    form["current_skills"] = skills_as_text(profile.get("current_skills"))
    return form


@router.post("/{session_id}/background")
def submit_background(session_id: str, form: BackgroundForm) -> Dict[str, Any]:
    """Validate the background form, merge it and move to the assessment."""
    controller = get_controller(session_id)
    logger.info(
        "Background submitted",
        extra={"extra_fields": {"job_title": form.job_title}},
    )
    return controller.submit_background(form.to_patch())


# ------------------------------
# Step 2: assessment
# ------------------------------
@router.get("/{session_id}/assessment")
def get_assessment(session_id: str) -> Dict[str, Any]:
    """Return the current question, generating the questions on first entry."""
    return get_controller(session_id).assessment()


@router.post("/{session_id}/assessment/select")
def select_option(session_id: str, request: SelectOptionRequest) -> Dict[str, Any]:
    """Select (single) or toggle (multiple) an option of the current question."""
    return get_controller(session_id).select_option(request.option)


@router.post("/{session_id}/assessment/answer")
def set_answer(session_id: str, request: AnswerRequest) -> Dict[str, Any]:
    """Set the rating or text answer of the current question."""
    return get_controller(session_id).set_answer(request.answer)


@router.post("/{session_id}/assessment/submit")
def submit_answer(session_id: str) -> Dict[str, Any]:
    """Submit the current answer; the last one completes the assessment."""
    controller = get_controller(session_id)
    return {**controller.submit_answer(), "step": controller.store.current_step}


# ------------------------------
# Step 3+: analysis
# ------------------------------
@router.get("/{session_id}/analysis")
def get_analysis(session_id: str) -> Dict[str, Any]:
    """Return the analysis fields, running the analyzer on first entry."""
    controller = get_controller(session_id)
    analysis = controller.ensure_analysis()
    return {"status": controller.status["analysis"], **analysis}


@router.get("/{session_id}/salary")
def get_salary(session_id: str) -> Dict[str, Any]:
    """Return the salary projection with its increase in percent and amount."""
    return get_controller(session_id).salary_view()


# ------------------------------
# Step 7: attachments and publish
# ------------------------------
@router.post("/{session_id}/uploads/{bucket}")
def upload_files(
    session_id: str, bucket: str, files: List[UploadFile] = File(...)
) -> Dict[str, Any]:
    """Upload a resume (replaces) or certificates (appended) for the Profile.

    Returns:
        {"urls": [...], "profile": {...}}
    """
    controller = get_controller(session_id)
    urls = controller.upload(
        bucket,
        [(file.filename or "upload", file.file.read(), file.content_type) for file in files],
    )
    return {"urls": urls, "profile": controller.view()["profile"]}


@router.post("/{session_id}/share")
def share_profile(session_id: str) -> Dict[str, Any]:
    """Publish the Profile and return its share link.

    Returns:
        {"share_id": "Ab3_k9Zx-Q", "share_url": "https://.../profile/Ab3_k9Zx-Q"}
    """
    return get_controller(session_id).share()
