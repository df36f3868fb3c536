"""Network rules: PAN identifier and channel mask."""

from __future__ import annotations

from stackconf.core.board import BoardSession, is_24ghz_device, is_sub1ghz_device
from stackconf.core.errors import ChannelMaskError
from stackconf.core.model import Instance, ValidationResult
from stackconf.core.validation import (
    C_TYPE_MAX,
    CHANNEL_MASK_BYTES,
    channel_mask_c_hex_str_arr,
    convert_to_c_byte_array,
    validate_range_hex,
)

# IEEE 802.15.4 O-QPSK channels in the 2.4 GHz band
CHANNELS_24GHZ = range(11, 27)


def channel_mask_hex(instance: Instance) -> list[str]:
    return channel_mask_c_hex_str_arr(instance.get("channelMask") or [])


def validate(instance: Instance, result: ValidationResult, session: BoardSession | None = None) -> None:
    validate_range_hex(instance, result, "panID", 0, C_TYPE_MAX["u_int16"])

    channels = instance.get("channelMask")
    if not isinstance(channels, list):
        result.log_error("Channel mask must be a list of channel numbers", instance, "channelMask")
        return
    if not channels:
        result.log_error("At least one channel must be selected", instance, "channelMask")
        return

    try:
        convert_to_c_byte_array(channels, CHANNEL_MASK_BYTES)
    except ChannelMaskError as exc:
        result.log_error(str(exc), instance, "channelMask")
        return

    if len(set(channels)) != len(channels):
        result.log_warning("Channel mask lists a channel more than once", instance, "channelMask")

    if session is not None and is_24ghz_device(session) and not is_sub1ghz_device(session):
        outside = sorted({ch for ch in channels if ch not in CHANNELS_24GHZ})
        if outside:
            listed = ", ".join(str(ch) for ch in outside)
            result.log_error(
                f"Channels {listed} are not available on {session.board} (2.4 GHz only: 11-26)",
                instance,
                "channelMask",
            )
