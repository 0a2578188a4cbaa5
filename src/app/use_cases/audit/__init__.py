"""
Audit Use Cases

All activity-log read use cases.
"""

from .get_activity_logs_use_case import (
    ActivityLogInfo,
    ActivityLogPage,
    GetActivityLogsUseCase,
)

__all__ = [
    "GetActivityLogsUseCase",
    "ActivityLogInfo",
    "ActivityLogPage",
]
