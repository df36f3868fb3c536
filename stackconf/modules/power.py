"""Power management rules: radio sleep mode and poll periods."""

from __future__ import annotations

from stackconf.core.board import BoardSession
from stackconf.core.model import Instance, ValidationResult
from stackconf.core.validation import C_TYPE_MAX, is_number, validate_range_int

POLL_PERIOD_MAX = C_TYPE_MAX["u_int32"]

ALWAYS_ON_DEVICE_TYPES = frozenset({"zc", "zr"})

POLL_FIELDS = (
    "pollPeriod",
    "queuedMessagePollPeriod",
    "dataResponsePollPeriod",
    "rejoinMessagePollPeriod",
)

_MESSAGE_POLL_PERIODS = POLL_FIELDS[1:]


def apply_device_type(instance: Instance) -> None:
    """Coordinators and routers must stay awake; end devices default to sleepy."""
    if instance.get("deviceType") in ALWAYS_ON_DEVICE_TYPES:
        instance["powerModeOperation"] = "alwaysOn"
    else:
        instance["powerModeOperation"] = "sleepy"


def power_mode_locked(instance: Instance) -> bool:
    return instance.get("deviceType") in ALWAYS_ON_DEVICE_TYPES


def poll_fields_active(instance: Instance) -> bool:
    return instance.get("powerModeOperation") != "alwaysOn"


def validate(instance: Instance, result: ValidationResult, session: BoardSession | None = None) -> None:
    poll_period = instance.get("pollPeriod")

    if is_number(poll_period):
        if poll_period < 0:
            result.log_error("Poll period cannot be negative", instance, "pollPeriod")

        if poll_period > POLL_PERIOD_MAX:
            result.log_error(
                f"Poll period must be less than or equal to {POLL_PERIOD_MAX} milliseconds (32 bits)",
                instance,
                "pollPeriod",
            )

        if poll_period == 0:
            result.log_info("Poll period of 0 disables polling", instance, "pollPeriod")
    else:
        result.log_error("Must be a whole number", instance, "pollPeriod")

    if power_mode_locked(instance) and instance.get("powerModeOperation") != "alwaysOn":
        result.log_error(
            "Coordinators and routers must use the Always On power mode",
            instance,
            "powerModeOperation",
        )

    for cfg_name in _MESSAGE_POLL_PERIODS:
        validate_range_int(instance, result, cfg_name, 0, C_TYPE_MAX["u_int16"])
