"""Calculator modules for the billing schema."""

from clinvoice_schema.calculators.billing_calculator import (
    TimesheetCharge,
    calculate_timesheet_charge,
    total_all,
    total_for_job,
)
from clinvoice_schema.calculators.time_utils import (
    SECONDS_PER_HOUR,
    elapsed_seconds,
    round_to_increment,
    seconds_to_decimal_hours,
)

__all__ = [
    # billing_calculator
    "TimesheetCharge",
    "calculate_timesheet_charge",
    "total_all",
    "total_for_job",
    # time_utils
    "SECONDS_PER_HOUR",
    "elapsed_seconds",
    "round_to_increment",
    "seconds_to_decimal_hours",
]
