from pickleflow.validation.schedule_checker import (
    CriterionResult,
    CriterionStatus,
    ScheduleValidator,
    ValidationReport,
    ViolationType,
    create_schedule_validator,
)

__all__ = [
    "CriterionResult",
    "CriterionStatus",
    "ScheduleValidator",
    "ValidationReport",
    "ViolationType",
    "create_schedule_validator",
]
