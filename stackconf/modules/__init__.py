"""Packaged configuration modules.

Each module is a YAML descriptor tree next to a Python file holding its
validation rule and change hooks.
"""

from __future__ import annotations

from collections.abc import Callable

from stackconf.core.board import BoardSession
from stackconf.core.model import Instance, ValidationResult
from stackconf.modules import network, power

Validator = Callable[[Instance, ValidationResult, BoardSession | None], None]
ChangeHook = Callable[[Instance], None]

VALIDATORS: dict[str, Validator] = {
    "network": network.validate,
    "power": power.validate,
}

CHANGE_HOOKS: dict[str, dict[str, ChangeHook]] = {
    "power": {"deviceType": power.apply_device_type},
}
