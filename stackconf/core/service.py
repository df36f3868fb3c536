"""Service layer used by the CLI and the public API."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml

from stackconf.core.board import BoardSession, capabilities
from stackconf.core.catalog import load_board_catalog
from stackconf.core.errors import ConfigResolutionError, InstanceLoadError
from stackconf.core.model import (
    Capability,
    DeviceContext,
    Instance,
    ModuleDefinition,
    ValidationReport,
    ValidationResult,
)
from stackconf.core.module_loader import load_modules
from stackconf.core.validation import (
    channel_mask_c_hex_str_arr,
    find_config,
    iter_configurables,
    restore_default_value,
)
from stackconf.core.yamlio import parse_yaml, read_text
from stackconf.modules import CHANGE_HOOKS, VALIDATORS

LOGGER = logging.getLogger(__name__)


class ConfigService:
    def __init__(self) -> None:
        loaded_modules = load_modules()
        loaded_catalog = load_board_catalog()
        self.modules = loaded_modules.modules
        self.catalog = loaded_catalog.catalog
        self.load_warnings = loaded_modules.warnings + loaded_catalog.warnings

    def list_modules(self) -> list[ModuleDefinition]:
        return sorted(self.modules.values(), key=lambda m: m.name)

    def get_module(self, name: str) -> ModuleDefinition:
        module = self.modules.get(name)
        if module is None:
            available = ", ".join(sorted(self.modules))
            raise ConfigResolutionError(f"Unknown module '{name}'. Available: {available}")
        return module

    def open_session(self, device_id: str, board_source: str | None = None) -> BoardSession:
        return BoardSession.open(
            DeviceContext(device_id=device_id, board_source=board_source),
            catalog=self.catalog,
        )

    def board_capabilities(
        self,
        device_id: str,
        board_source: str | None = None,
    ) -> tuple[BoardSession, dict[Capability, bool]]:
        session = self.open_session(device_id, board_source)
        return session, capabilities(session)

    def default_instance(self, module_name: str) -> Instance:
        module = self.get_module(module_name)
        return {cfg.name: copy.deepcopy(cfg.default) for cfg in iter_configurables(module.config)}

    def set_value(self, module_name: str, instance: Instance, cfg_name: str, value: Any) -> None:
        module = self.get_module(module_name)
        if find_config(module.config, cfg_name) is None:
            raise ConfigResolutionError(f"Module '{module_name}' has no configurable '{cfg_name}'")
        instance[cfg_name] = value
        hook = CHANGE_HOOKS.get(module_name, {}).get(cfg_name)
        if hook is not None:
            hook(instance)

    def reset_value(self, module_name: str, instance: Instance, cfg_name: str) -> None:
        module = self.get_module(module_name)
        cfg = find_config(module.config, cfg_name)
        if cfg is None:
            raise ConfigResolutionError(f"Module '{module_name}' has no configurable '{cfg_name}'")
        restore_default_value(instance, cfg, cfg_name)

    def validate(
        self,
        module_name: str,
        values: Mapping[str, Any] | None = None,
        session: BoardSession | None = None,
    ) -> ValidationReport:
        """Apply ``values`` on top of the module defaults and validate the result.

        Values are applied in order and fire change hooks, so a value given
        after ``deviceType`` wins over what the hook picked. Unknown names are
        reported as warnings and skipped. With a ``session`` the module rules
        also check the values against the board's radio capabilities.
        """
        module = self.get_module(module_name)
        instance = self.default_instance(module_name)
        result = ValidationResult()

        for cfg_name, value in (values or {}).items():
            cfg = find_config(module.config, cfg_name)
            if cfg is None:
                LOGGER.warning("Ignoring unknown configurable '%s' for module '%s'", cfg_name, module_name)
                result.log_warning(f"Unknown configurable '{cfg_name}' ignored", instance, cfg_name)
                continue
            self.set_value(module_name, instance, cfg_name, value)

        for cfg in iter_configurables(module.config):
            if cfg.options and instance.get(cfg.name) not in [opt.name for opt in cfg.options]:
                allowed = ", ".join(opt.name for opt in cfg.options)
                result.log_error(f"Must be one of: {allowed}", instance, cfg.name)

        validator = VALIDATORS.get(module_name)
        if validator is not None:
            validator(instance, result, session)
        board = session.board if session is not None else None
        return ValidationReport(module=module_name, instance=instance, result=result, board=board)

    def channel_mask(self, channels: Iterable[int]) -> list[str]:
        return channel_mask_c_hex_str_arr(channels)


def read_instance_values(path: Path) -> dict[str, Any]:
    try:
        content = read_text(path)
    except OSError as exc:
        raise InstanceLoadError(f"Could not read values file {path}: {exc}") from exc

    try:
        loaded = parse_yaml(content)
    except yaml.YAMLError as exc:
        raise InstanceLoadError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise InstanceLoadError(f"Values file {path} must contain a mapping at root")
    return loaded
