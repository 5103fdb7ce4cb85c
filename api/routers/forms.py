"""
Form API Endpoints.

Render-time and submission-time lock checks for the host form layer.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from api.dependencies import get_activity_lock_service
from api.models import (
    ClientSettingsResponse,
    FormRenderStateResponse,
    FormValuesRequest,
    SubmissionValidationResponse,
)
from domain.errors import ConfigurationError
from services.activity_lock_service import ActivityLockService

logger = logging.getLogger(__name__)

router = APIRouter()


def _configuration_error(e: ConfigurationError) -> HTTPException:
    return HTTPException(status_code=404 if e.not_found else 400, detail=str(e))


@router.post(
    "/forms/{webform_id}/render-state",
    response_model=FormRenderStateResponse,
    summary="Form Render State",
    description="Client settings and initial lock state for rendering a webform."
)
def get_render_state(
    webform_id: str,
    request: FormValuesRequest,
    service: ActivityLockService = Depends(get_activity_lock_service),
):
    """
    Prepare a webform render.

    Returns the field names the interaction controller tracks. When the
    request already carries all three identity values (draft or prefilled
    link), the form is checked immediately and, if locked, the response lists
    the elements to disable and asks for the submit actions to be hidden.
    """
    try:
        state = service.render_state(webform_id, request.values)
    except ConfigurationError as e:
        raise _configuration_error(e)
    except Exception:
        logger.exception("Render state failed", extra={"webform_id": webform_id})
        raise HTTPException(
            status_code=500,
            detail="Failed to prepare form"
        )

    settings = state.client_settings
    return FormRenderStateResponse(
        settings=ClientSettingsResponse(
            webform_id=settings.webform_id,
            first_name_field=settings.first_name_field,
            last_name_field=settings.last_name_field,
            email_field=settings.email_field,
            check_url=settings.check_path,
            debounce_ms=settings.debounce_ms,
        ),
        locked=state.plan.locked,
        message=state.plan.message,
        disabled_elements=list(state.plan.disabled_keys),
        hide_actions=state.plan.hide_actions,
    )


@router.post(
    "/forms/{webform_id}/validate",
    response_model=SubmissionValidationResponse,
    responses={422: {"model": SubmissionValidationResponse}},
    summary="Validate Submission",
    description="Re-run the activity lock check for a submitted webform."
)
def validate_submission(
    webform_id: str,
    request: FormValuesRequest,
    service: ActivityLockService = Depends(get_activity_lock_service),
):
    """
    Submission-time check.

    Submissions without all three identity values pass. A locked submission
    is rejected with status 422 and the lock message.
    """
    try:
        decision = service.validate_submission(webform_id, request.values)
    except ConfigurationError as e:
        raise _configuration_error(e)
    except Exception:
        logger.exception("Submission validation failed", extra={"webform_id": webform_id})
        raise HTTPException(
            status_code=500,
            detail="Failed to validate submission"
        )

    if decision.locked:
        return JSONResponse(
            status_code=422,
            content=SubmissionValidationResponse(valid=False, message=decision.message).model_dump()
        )

    return SubmissionValidationResponse(valid=True)
