"""Board name resolution and radio capability predicates."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from stackconf.core.catalog import BoardCatalog, packaged_catalog
from stackconf.core.model import Capability, DeviceContext

LOGGER = logging.getLogger(__name__)


def board_name_from_source(source: str) -> str:
    """Strip a board source path down to its bare name.

    ``/ti/boards/CC1352R1_LAUNCHXL.syscfg.json`` becomes ``CC1352R1_LAUNCHXL``.
    """
    name = source.rsplit("/", 1)[-1]
    return name.split(".", 1)[0]


def resolve_board_name(
    device: DeviceContext,
    previous_board: str | None = None,
    *,
    convert_to_board: bool = True,
    catalog: BoardCatalog | None = None,
) -> str:
    """Return the board name for ``device``, or the device name itself.

    With ``convert_to_board`` a bare device is mapped to its default
    LaunchPad, unless a LaunchPad was already picked earlier in the session.
    """
    catalog = catalog or packaged_catalog()
    name = device.device_id
    if device.board_source is not None:
        name = board_name_from_source(device.board_source)

    if not convert_to_board or catalog.board_marker in name:
        return name

    if previous_board and catalog.board_marker in previous_board:
        return previous_board

    board = catalog.board_for_device(name)
    if board is None:
        LOGGER.debug("No default board for device '%s'", name)
        return name
    return board


@dataclass(frozen=True)
class BoardSession:
    """Board context fixed at the start of a configuration session."""

    device: DeviceContext
    board: str
    catalog: BoardCatalog = field(repr=False, compare=False)

    @classmethod
    def open(cls, device: DeviceContext, catalog: BoardCatalog | None = None) -> BoardSession:
        catalog = catalog or packaged_catalog()
        board = resolve_board_name(device, catalog=catalog)
        LOGGER.debug("Resolved board '%s' for device '%s'", board, device.device_id)
        return cls(device=device, board=board, catalog=catalog)

    @property
    def ccfg_settings(self) -> dict[str, Any] | None:
        return self.catalog.ccfg_settings.get(self.board)

    def current_board(self) -> str:
        return resolve_board_name(self.device, self.board, catalog=self.catalog)


def has_capability(session: BoardSession, capability: Capability) -> bool:
    board = session.current_board()
    return any(marker in board for marker in session.catalog.capability_markers[capability])


def is_sub1ghz_device(session: BoardSession) -> bool:
    return has_capability(session, Capability.SUB1GHZ)


def is_24ghz_device(session: BoardSession) -> bool:
    return has_capability(session, Capability.GHZ24)


def is_433mhz_device(session: BoardSession) -> bool:
    return has_capability(session, Capability.MHZ433)


def is_highpa_device(session: BoardSession) -> bool:
    return has_capability(session, Capability.HIGH_PA)


def capabilities(session: BoardSession) -> dict[Capability, bool]:
    return {capability: has_capability(session, capability) for capability in Capability}
