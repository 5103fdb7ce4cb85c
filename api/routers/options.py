"""
Options API Endpoints.

CRM option lists used when configuring an activity lock handler.
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_option_source
from api.models import OptionListResponse
from repositories.option_value_repository import ACTIVITY_STATUS_GROUP, ACTIVITY_TYPE_GROUP
from services.collaborators import OptionValueSource

logger = logging.getLogger(__name__)

router = APIRouter()


def _list_options(source: OptionValueSource, option_group: str) -> OptionListResponse:
    # An unreachable CRM yields an empty list rather than a broken settings page.
    try:
        options = source.list_option_values(option_group)
    except Exception as e:
        logger.error(
            f"Error loading {option_group} options: {e}",
            extra={"option_group": option_group, "error": str(e)},
        )
        options = {}
    return OptionListResponse(options=dict(options))


@router.get(
    "/options/activity-types",
    response_model=OptionListResponse,
    summary="List Activity Types",
    description="Active CRM activity types in display order."
)
def list_activity_types(source: OptionValueSource = Depends(get_option_source)):
    return _list_options(source, ACTIVITY_TYPE_GROUP)


@router.get(
    "/options/activity-statuses",
    response_model=OptionListResponse,
    summary="List Activity Statuses",
    description="Active CRM activity statuses in display order."
)
def list_activity_statuses(source: OptionValueSource = Depends(get_option_source)):
    return _list_options(source, ACTIVITY_STATUS_GROUP)
