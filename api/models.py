"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ============================================================================
# Activity Check Models
# ============================================================================

class ActivityCheckRequest(BaseModel):
    """
    Remote activity check sent while the visitor fills in the form.

    Fields are optional at the schema level so that missing values produce the
    same 400 response as empty ones.
    """
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    webform_id: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "first_name": "Jane",
                "last_name": "Doe",
                "email": "jane@example.com",
                "webform_id": "contact_request"
            }
        }


class ActivityCheckResponse(BaseModel):
    """Result of an activity check."""
    activity_exists: bool
    message: str = ""

    class Config:
        json_schema_extra = {
            "example": {
                "activity_exists": True,
                "message": "<p>This form is currently locked.</p>"
            }
        }


# ============================================================================
# Form Models
# ============================================================================

class FormValuesRequest(BaseModel):
    """Submission or prefill values keyed by webform element name."""
    values: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        json_schema_extra = {
            "example": {
                "values": {
                    "first_name": "Jane",
                    "last_name": "Doe",
                    "email_address": "jane@example.com"
                }
            }
        }


class ClientSettingsResponse(BaseModel):
    """Settings the browser needs to run the interaction controller."""
    webform_id: str
    first_name_field: str
    last_name_field: str
    email_field: str
    check_url: str
    debounce_ms: int


class FormRenderStateResponse(BaseModel):
    """Client settings plus the initial lock state of a form render."""
    settings: ClientSettingsResponse
    locked: bool
    message: str = ""
    disabled_elements: List[str] = Field(default_factory=list)
    hide_actions: bool = False


class SubmissionValidationResponse(BaseModel):
    """Result of the submission-time check."""
    valid: bool
    message: str = ""


# ============================================================================
# Option Models
# ============================================================================

class OptionListResponse(BaseModel):
    """Active CRM option values as {value: label} in display order."""
    options: Dict[str, str]

    class Config:
        json_schema_extra = {
            "example": {
                "options": {
                    "1": "Meeting",
                    "2": "Phone Call"
                }
            }
        }

