"""Core data models used across loaders, validators, service, and CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

Instance = dict[str, Any]


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Capability(str, Enum):
    SUB1GHZ = "sub1ghz"
    GHZ24 = "2.4ghz"
    MHZ433 = "433mhz"
    HIGH_PA = "high_pa"


@dataclass(frozen=True)
class Option:
    name: str
    display_name: str


@dataclass(frozen=True)
class Descriptor:
    """One configurable, or a group of configurables when ``config`` is set."""

    name: str
    display_name: str = ""
    description: str = ""
    long_description: str = ""
    default: Any = None
    options: tuple[Option, ...] = ()
    hidden: bool = False
    config: tuple[Descriptor, ...] | None = None

    @property
    def is_group(self) -> bool:
        return self.config is not None


@dataclass(frozen=True)
class ModuleDefinition:
    name: str
    display_name: str
    config: tuple[Descriptor, ...]
    source: str


@dataclass(frozen=True)
class DeviceContext:
    device_id: str
    board_source: str | None = None


@dataclass(frozen=True)
class ValidationRecord:
    severity: Severity
    message: str
    field: str
    instance: Instance | None = field(default=None, hash=False, compare=False)


@dataclass
class ValidationResult:
    """Collects every issue found while validating; never stops at the first one."""

    records: list[ValidationRecord] = field(default_factory=list)

    def log_error(self, message: str, instance: Instance | None, field_name: str) -> None:
        self.records.append(ValidationRecord(Severity.ERROR, message, field_name, instance))

    def log_warning(self, message: str, instance: Instance | None, field_name: str) -> None:
        self.records.append(ValidationRecord(Severity.WARNING, message, field_name, instance))

    def log_info(self, message: str, instance: Instance | None, field_name: str) -> None:
        self.records.append(ValidationRecord(Severity.INFO, message, field_name, instance))

    @property
    def errors(self) -> list[ValidationRecord]:
        return [r for r in self.records if r.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationRecord]:
        return [r for r in self.records if r.severity is Severity.WARNING]

    @property
    def infos(self) -> list[ValidationRecord]:
        return [r for r in self.records if r.severity is Severity.INFO]

    @property
    def has_errors(self) -> bool:
        return any(r.severity is Severity.ERROR for r in self.records)

    def for_field(self, field_name: str) -> list[ValidationRecord]:
        return [r for r in self.records if r.field == field_name]


@dataclass(frozen=True)
class ValidationReport:
    module: str
    instance: Instance
    result: ValidationResult
    board: str | None = None
