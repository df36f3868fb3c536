"""Board catalog loading: device-family mapping, capability markers, CCFG boards."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError

from stackconf.core.errors import CatalogError
from stackconf.core.model import Capability
from stackconf.core.yamlio import load_schema_validator, parse_yaml, read_text

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoardCatalog:
    board_marker: str
    device_to_board: tuple[tuple[str, str], ...]
    capability_markers: dict[Capability, tuple[str, ...]]
    ccfg_settings: dict[str, dict[str, Any]]

    def board_for_device(self, name: str) -> str | None:
        for family, board in self.device_to_board:
            if family in name:
                return board
        return None


@dataclass(frozen=True)
class LoadedCatalog:
    catalog: BoardCatalog
    warnings: tuple[str, ...]


def user_catalog_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "stackconf/boards.yaml"


def _read_document(path: Path | Traversable, schema_name: str, *, allow_empty: bool = False) -> dict[str, Any]:
    try:
        content = read_text(path)
    except OSError as exc:
        raise CatalogError(f"Could not read board catalog {path}: {exc}") from exc

    try:
        loaded = parse_yaml(content)
    except yaml.YAMLError as exc:
        raise CatalogError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None and allow_empty:
        return {}
    if not isinstance(loaded, dict):
        raise CatalogError(f"Board catalog {path} must contain a mapping at root")

    validator = load_schema_validator(schema_name)
    try:
        validator.validate(loaded)
    except ValidationError as exc:
        where = ".".join(str(p) for p in exc.path)
        where = f" ({where})" if where else ""
        raise CatalogError(f"Schema validation failed for {path}{where}: {exc.message}") from exc
    return loaded


def _build_catalog(doc: dict[str, Any]) -> BoardCatalog:
    markers = {
        Capability(key): tuple(values) for key, values in doc["capabilities"].items()
    }
    return BoardCatalog(
        board_marker=doc["board_marker"],
        device_to_board=tuple(doc["device_to_board"].items()),
        capability_markers=markers,
        ccfg_settings={board: dict(settings or {}) for board, settings in doc["ccfg_settings"].items()},
    )


def _merge_overlay(catalog: BoardCatalog, overlay: dict[str, Any]) -> tuple[BoardCatalog, list[str]]:
    warnings: list[str] = []
    mapping = dict(catalog.device_to_board)
    for family, board in overlay.get("device_to_board", {}).items():
        if family in mapping:
            warning = f"User board catalog overrides device family '{family}'"
            LOGGER.warning(warning)
            warnings.append(warning)
        mapping[family] = board

    ccfg = dict(catalog.ccfg_settings)
    for board, settings in overlay.get("ccfg_settings", {}).items():
        ccfg[board] = dict(settings or {})

    merged = BoardCatalog(
        board_marker=catalog.board_marker,
        device_to_board=tuple(mapping.items()),
        capability_markers=catalog.capability_markers,
        ccfg_settings=ccfg,
    )
    return merged, warnings


@lru_cache(maxsize=1)
def packaged_catalog() -> BoardCatalog:
    path = resources.files("stackconf.data").joinpath("boards.yaml")
    return _build_catalog(_read_document(path, "boards.schema.json"))


def load_board_catalog() -> LoadedCatalog:
    catalog = packaged_catalog()
    user_path = user_catalog_path()
    if not user_path.is_file():
        return LoadedCatalog(catalog=catalog, warnings=())

    overlay = _read_document(user_path, "boards_overlay.schema.json", allow_empty=True)
    merged, warnings = _merge_overlay(catalog, overlay)
    return LoadedCatalog(catalog=merged, warnings=tuple(warnings))
