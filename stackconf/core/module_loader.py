"""Loading and validation of YAML configuration-module definitions."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError

from stackconf.core.errors import ModuleLoadError, ModuleValidationError
from stackconf.core.model import Descriptor, ModuleDefinition, Option
from stackconf.core.yamlio import load_schema_validator, parse_yaml, read_text

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedModules:
    modules: dict[str, ModuleDefinition]
    warnings: tuple[str, ...]


def _module_dirs() -> tuple[Path, Path]:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    xdg_data = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local/share"))
    return xdg_config / "stackconf/modules", xdg_data / "stackconf/modules"


def _read_yaml(path: Path | Traversable) -> dict[str, Any]:
    try:
        content = read_text(path)
    except OSError as exc:
        raise ModuleLoadError(f"Could not read module file {path}: {exc}") from exc

    try:
        loaded = parse_yaml(content)
    except yaml.YAMLError as exc:
        raise ModuleValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ModuleValidationError(f"Module file {path} must contain a mapping at root")
    return loaded


def _normalize_bool(value: Any, *, context: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    raise ModuleValidationError(f"{context} must be boolean true/false")


def _build_descriptors(items: list[dict[str, Any]], *, context: str) -> tuple[Descriptor, ...]:
    seen: set[str] = set()
    descriptors: list[Descriptor] = []
    for item in items:
        name = item["name"]
        where = f"{context}.{name}"
        if name in seen:
            raise ModuleValidationError(f"Duplicate configurable '{name}' in {context}")
        seen.add(name)

        options = tuple(
            Option(name=opt["name"], display_name=opt.get("display_name", opt["name"]))
            for opt in item.get("options", [])
        )
        default = item.get("default")
        if options and default is not None and default not in [opt.name for opt in options]:
            raise ModuleValidationError(f"{where} default '{default}' is not one of its options")

        children = None
        if "config" in item:
            children = _build_descriptors(item["config"], context=where)

        descriptors.append(
            Descriptor(
                name=name,
                display_name=item.get("display_name", name),
                description=item.get("description", ""),
                long_description=item.get("long_description", ""),
                default=default,
                options=options,
                hidden=_normalize_bool(item.get("hidden", False), context=f"{where}.hidden"),
                config=children,
            )
        )
    return tuple(descriptors)


def _build_module(doc: dict[str, Any], source: Path | Traversable) -> ModuleDefinition:
    validator = load_schema_validator("module.schema.json")
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ModuleValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    return ModuleDefinition(
        name=doc["name"],
        display_name=doc.get("display_name", doc["name"]),
        config=_build_descriptors(doc["config"], context=doc["name"]),
        source=str(source),
    )


def _iter_packaged_module_paths() -> list[Traversable]:
    module_root = resources.files("stackconf.modules")
    return [item for item in module_root.iterdir() if item.name.endswith((".yml", ".yaml"))]


def _iter_user_module_paths() -> list[Path]:
    paths: list[Path] = []
    for directory in _module_dirs():
        if not directory.exists() or not directory.is_dir():
            continue
        paths.extend(sorted(p for p in directory.iterdir() if p.suffix in {".yml", ".yaml"}))
    return paths


def load_modules() -> LoadedModules:
    modules: dict[str, ModuleDefinition] = {}
    warnings: list[str] = []

    for path in sorted(_iter_packaged_module_paths(), key=lambda p: p.name):
        module = _build_module(_read_yaml(path), path)
        modules[module.name] = module

    for path in _iter_user_module_paths():
        module = _build_module(_read_yaml(path), path)
        if module.name in modules:
            warning = f"User module '{module.name}' overrides packaged module"
            LOGGER.warning(warning)
            warnings.append(warning)
        modules[module.name] = module

    return LoadedModules(modules=modules, warnings=tuple(warnings))
