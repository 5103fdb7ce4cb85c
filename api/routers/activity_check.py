"""
Activity Check API Endpoints.

The remote check the browser calls while a visitor fills in a locked-capable
webform.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_activity_lock_service
from api.models import ActivityCheckRequest, ActivityCheckResponse
from domain.errors import ConfigurationError, ValidationError
from domain.identity import IdentityInput
from services.activity_lock_service import ActivityLockService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/activity-lock/check",
    response_model=ActivityCheckResponse,
    summary="Check Activity Lock",
    description="Check whether a matching CRM contact already has a qualifying activity."
)
def check_activity(
    request: ActivityCheckRequest,
    service: ActivityLockService = Depends(get_activity_lock_service),
):
    """
    Decide whether the webform should lock for the entered identity.

    **How it works:**
    1. Validates that first name, last name, email and webform id are present
    2. Loads the webform's activity lock handler configuration
    3. Finds the contact by name and email
    4. Looks for a qualifying activity of the contact (or their employer)

    **Example request:**
    ```json
    {
      "first_name": "Jane",
      "last_name": "Doe",
      "email": "jane@example.com",
      "webform_id": "contact_request"
    }
    ```

    **Response:**
    ```json
    {"activity_exists": true, "message": "<p>This form is currently locked.</p>"}
    ```
    """
    identity = IdentityInput.of(request.first_name, request.last_name, request.email)

    try:
        decision = service.check(identity, request.webform_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConfigurationError as e:
        raise HTTPException(status_code=404 if e.not_found else 400, detail=str(e))
    except Exception:
        logger.exception("Activity check failed", extra={"webform_id": request.webform_id})
        raise HTTPException(
            status_code=500,
            detail="Failed to check activity"
        )

    return ActivityCheckResponse(
        activity_exists=decision.locked,
        message=decision.message
    )
