"""
Option value repository.

Activity types and statuses are CRM option values grouped by name
("activity_type", "activity_status"). The configuration UI lists the active
ones in weight order.
"""

from __future__ import annotations

from typing import Dict

from repositories.client import rows_or_raise

ACTIVITY_TYPE_GROUP = "activity_type"
ACTIVITY_STATUS_GROUP = "activity_status"


class SupabaseOptionValueSource:
    def __init__(self, client) -> None:
        self._client = client

    def list_option_values(self, option_group: str) -> Dict[str, str]:
        """
        Active option values of a group as {value: label}, ordered by weight.

        Example:
            types = source.list_option_values(ACTIVITY_TYPE_GROUP)
            # {"1": "Meeting", "2": "Phone Call", ...}
        """
        response = (
            self._client.table("option_values")
            .select("value, label, weight")
            .eq("option_group_name", option_group)
            .eq("is_active", True)
            .order("weight")
            .execute()
        )

        rows = rows_or_raise(response, f"fetch {option_group} options")
        return {str(row["value"]): str(row["label"]) for row in rows}


__all__ = ["ACTIVITY_STATUS_GROUP", "ACTIVITY_TYPE_GROUP", "SupabaseOptionValueSource"]
