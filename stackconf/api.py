"""Stable public API for building tooling on top of stackconf.

This module is the supported integration surface for third-party callers,
e.g. a configuration GUI hosting the module definitions. Avoid importing
from internal modules unless intentionally depending on non-stable internals.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from stackconf.core.board import (
    BoardSession,
    is_24ghz_device,
    is_433mhz_device,
    is_highpa_device,
    is_sub1ghz_device,
    resolve_board_name,
)
from stackconf.core.errors import (
    CatalogError,
    ChannelMaskError,
    ConfigResolutionError,
    InstanceLoadError,
    ModuleLoadError,
    ModuleValidationError,
    StackconfError,
)
from stackconf.core.model import (
    Capability,
    Descriptor,
    DeviceContext,
    Instance,
    ModuleDefinition,
    Severity,
    ValidationRecord,
    ValidationReport,
    ValidationResult,
)
from stackconf.core.service import ConfigService
from stackconf.core.validation import (
    C_TYPE_MAX,
    channel_mask_c_hex_str_arr,
    convert_to_c_byte_array,
    find_config,
    format_hex_bytes,
    restore_default_value,
    to_hex_string,
    validate_range_hex,
    validate_range_int,
)

__all__ = [
    "StackconfError",
    "CatalogError",
    "ChannelMaskError",
    "ConfigResolutionError",
    "InstanceLoadError",
    "ModuleLoadError",
    "ModuleValidationError",
    "BoardSession",
    "Capability",
    "Descriptor",
    "DeviceContext",
    "Instance",
    "ModuleDefinition",
    "Severity",
    "ValidationRecord",
    "ValidationReport",
    "ValidationResult",
    "C_TYPE_MAX",
    "channel_mask_c_hex_str_arr",
    "convert_to_c_byte_array",
    "find_config",
    "format_hex_bytes",
    "restore_default_value",
    "to_hex_string",
    "validate_range_hex",
    "validate_range_int",
    "resolve_board_name",
    "is_sub1ghz_device",
    "is_24ghz_device",
    "is_433mhz_device",
    "is_highpa_device",
    "BoardReport",
    "Client",
]


@dataclass(frozen=True)
class BoardReport:
    """Resolved board and capability flags for a device context."""

    session: BoardSession
    capabilities: dict[Capability, bool]

    @property
    def board(self) -> str:
        return self.session.board


class Client:
    """Public client for stackconf module definitions and board resolution.

    A `Client` loads packaged and user module definitions plus the board
    catalog once, then answers board, validation and reset requests.
    """

    def __init__(self) -> None:
        self._service = ConfigService()

    @property
    def load_warnings(self) -> tuple[str, ...]:
        return self._service.load_warnings

    def list_modules(self) -> list[ModuleDefinition]:
        return self._service.list_modules()

    def open_session(self, device_id: str, *, board_source: str | None = None) -> BoardSession:
        return self._service.open_session(device_id, board_source)

    def get_board_report(self, device_id: str, *, board_source: str | None = None) -> BoardReport:
        session, flags = self._service.board_capabilities(device_id, board_source)
        return BoardReport(session=session, capabilities=flags)

    def default_instance(self, module: str) -> Instance:
        return self._service.default_instance(module)

    def set_value(self, module: str, instance: Instance, name: str, value: Any) -> None:
        self._service.set_value(module, instance, name, value)

    def reset_value(self, module: str, instance: Instance, name: str) -> None:
        self._service.reset_value(module, instance, name)

    def validate(
        self,
        module: str,
        values: Mapping[str, Any] | None = None,
        *,
        device_id: str | None = None,
        board_source: str | None = None,
    ) -> ValidationReport:
        session = None
        if device_id is not None:
            session = self._service.open_session(device_id, board_source)
        return self._service.validate(module, values, session)

    def channel_mask(self, channels: Iterable[int]) -> list[str]:
        return self._service.channel_mask(channels)
