"""Range validation, channel mask encoding, and descriptor tree helpers."""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable, Iterator, Sequence
from numbers import Real
from typing import Any

from stackconf.core.errors import ChannelMaskError
from stackconf.core.model import Descriptor, Instance, ValidationResult

C_TYPE_MAX = {
    "u_int8": 255,
    "u_int16": 65535,
    "u_int32": 4294967295,
    "int8_t": 127,
}

CHANNEL_MASK_BYTES = 17


def to_hex_string(number: int, padding: int | None = None) -> str:
    digits = format(number, "X")
    if padding:
        digits = digits.rjust(padding, "0")
    return "0x" + digits


def is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def is_positive_integer(value: Any) -> bool:
    """True for whole numbers >= 0; ``3.0`` counts, ``True`` does not."""
    if not is_number(value):
        return False
    if isinstance(value, float) and not value.is_integer():
        return False
    return value >= 0


def validate_range(
    instance: Instance,
    result: ValidationResult,
    cfg_name: str,
    minimum: int,
    maximum: int,
    transform: Callable[[int], str],
) -> bool:
    """Check ``instance[cfg_name]`` lies in ``[minimum, maximum]``.

    Both the whole-number check and the range check always run, so a value
    such as ``-1`` reports two errors. ``transform`` only formats the bounds
    in the message. Returns whether the value is out of range.
    """
    value = instance.get(cfg_name)

    if not is_positive_integer(value):
        result.log_error("Must be a whole number", instance, cfg_name)

    if not is_number(value):
        return False

    out_of_range = value < minimum or value > maximum
    if out_of_range:
        result.log_error(
            f"Must be between {transform(minimum)} and {transform(maximum)}",
            instance,
            cfg_name,
        )
    return out_of_range


def validate_range_hex(
    instance: Instance, result: ValidationResult, cfg_name: str, minimum: int, maximum: int
) -> bool:
    return validate_range(instance, result, cfg_name, minimum, maximum, to_hex_string)


def validate_range_int(
    instance: Instance, result: ValidationResult, cfg_name: str, minimum: int, maximum: int
) -> bool:
    return validate_range(instance, result, cfg_name, minimum, maximum, str)


def convert_to_c_byte_array(bits: Iterable[int], num_bytes: int) -> list[int]:
    """Set each listed bit in a little-endian byte array of ``num_bytes``.

    ``[1, 8]`` with 3 bytes gives ``[0x02, 0x01, 0x00]``.
    """
    arr = [0] * num_bytes
    limit = num_bytes * 8
    for bit in bits:
        if isinstance(bit, bool) or not isinstance(bit, int):
            raise ChannelMaskError(f"Channel index {bit!r} is not an integer")
        if bit < 0 or bit >= limit:
            raise ChannelMaskError(f"Channel index {bit} outside 0..{limit - 1}")
        arr[bit // 8] |= 1 << (bit % 8)
    return arr


def format_hex_bytes(byte_array: Iterable[int]) -> list[str]:
    return [to_hex_string(byte, 2) for byte in byte_array]


def channel_mask_c_hex_str_arr(channel_mask: Iterable[int]) -> list[str]:
    return format_hex_bytes(convert_to_c_byte_array(channel_mask, CHANNEL_MASK_BYTES))


def find_config(config: Sequence[Descriptor], config_name: str) -> Descriptor | None:
    # Groups are containers: only their children are matched by name.
    for element in config:
        if element.config is not None:
            found = find_config(element.config, config_name)
            if found is not None:
                return found
        elif element.name == config_name:
            return element
    return None


def restore_default_value(instance: Instance, cfg: Descriptor, cfg_name: str) -> None:
    if cfg.name == cfg_name and cfg.default is not None:
        instance[cfg_name] = copy.deepcopy(cfg.default)


def iter_configurables(config: Sequence[Descriptor]) -> Iterator[Descriptor]:
    """Yield every non-group descriptor in depth-first order."""
    for element in config:
        if element.config is not None:
            yield from iter_configurables(element.config)
        else:
            yield element
