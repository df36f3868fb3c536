from __future__ import annotations

import pytest

from stackconf.core.errors import ChannelMaskError
from stackconf.core.model import Descriptor, ValidationResult
from stackconf.core.validation import (
    C_TYPE_MAX,
    channel_mask_c_hex_str_arr,
    convert_to_c_byte_array,
    find_config,
    format_hex_bytes,
    is_positive_integer,
    iter_configurables,
    restore_default_value,
    to_hex_string,
    validate_range,
    validate_range_hex,
    validate_range_int,
)


def test_c_type_max_table() -> None:
    assert C_TYPE_MAX == {"u_int8": 255, "u_int16": 65535, "u_int32": 4294967295, "int8_t": 127}


def test_to_hex_string() -> None:
    assert to_hex_string(255) == "0xFF"
    assert to_hex_string(2, 2) == "0x02"
    assert to_hex_string(0xABC, 6) == "0x000ABC"
    assert to_hex_string(0) == "0x0"


def test_is_positive_integer() -> None:
    assert is_positive_integer(0)
    assert is_positive_integer(3.0)
    assert not is_positive_integer(-1)
    assert not is_positive_integer(1.5)
    assert not is_positive_integer(True)
    assert not is_positive_integer("3")


def test_negative_value_reports_both_errors() -> None:
    inst = {"period": -1}
    result = ValidationResult()
    assert validate_range(inst, result, "period", 0, 65535, str) is True
    messages = [r.message for r in result.errors]
    assert messages == ["Must be a whole number", "Must be between 0 and 65535"]
    assert all(r.field == "period" and r.instance is inst for r in result.errors)


def test_value_in_range_reports_nothing() -> None:
    result = ValidationResult()
    assert validate_range({"period": 100}, result, "period", 0, 65535, str) is False
    assert result.records == []


def test_fraction_in_range_is_only_a_whole_number_error() -> None:
    result = ValidationResult()
    assert validate_range_int({"period": 2.5}, result, "period", 0, 10) is False
    assert [r.message for r in result.errors] == ["Must be a whole number"]


def test_non_numeric_value_is_a_whole_number_error() -> None:
    result = ValidationResult()
    assert validate_range_int({"period": "fast"}, result, "period", 0, 10) is False
    assert [r.message for r in result.errors] == ["Must be a whole number"]


def test_hex_bounds_in_message() -> None:
    result = ValidationResult()
    assert validate_range_hex({"panID": 0x10000}, result, "panID", 0, 0xFFFF) is True
    assert [r.message for r in result.errors] == ["Must be between 0x0 and 0xFFFF"]


def test_convert_to_c_byte_array() -> None:
    assert convert_to_c_byte_array([1, 8], 17) == [0x02, 0x01] + [0] * 15
    assert convert_to_c_byte_array([8, 1, 1], 17) == convert_to_c_byte_array([1, 8], 17)
    assert convert_to_c_byte_array([], 3) == [0, 0, 0]


@pytest.mark.parametrize("bit", [-1, 136, "3", True])
def test_convert_rejects_bad_indices(bit: object) -> None:
    with pytest.raises(ChannelMaskError):
        convert_to_c_byte_array([0, bit], 17)  # type: ignore[list-item]


def test_format_hex_bytes() -> None:
    assert format_hex_bytes([2, 1, 0]) == ["0x02", "0x01", "0x00"]


def test_channel_mask_hex_strings() -> None:
    mask = channel_mask_c_hex_str_arr([0, 135])
    assert len(mask) == 17
    assert mask[0] == "0x01"
    assert mask[-1] == "0x80"
    assert set(mask[1:-1]) == {"0x00"}


def _forest() -> list[Descriptor]:
    return [
        Descriptor(name="a", default=1),
        Descriptor(name="g", config=(Descriptor(name="b", default=2),)),
    ]


def test_find_config_searches_groups() -> None:
    found = find_config(_forest(), "b")
    assert found is not None
    assert found.default == 2


def test_find_config_missing_and_group_names() -> None:
    assert find_config(_forest(), "zzz") is None
    assert find_config(_forest(), "g") is None


def test_find_config_prefers_nested_match_before_later_sibling() -> None:
    forest = [
        Descriptor(name="g", config=(Descriptor(name="x", default="nested"),)),
        Descriptor(name="x", default="top"),
    ]
    found = find_config(forest, "x")
    assert found is not None
    assert found.default == "nested"


def test_iter_configurables_flattens_groups() -> None:
    assert [d.name for d in iter_configurables(_forest())] == ["a", "b"]


def test_restore_default_value_is_idempotent() -> None:
    cfg = Descriptor(name="pollPeriod", default=3000)
    inst = {"pollPeriod": 5}
    restore_default_value(inst, cfg, "pollPeriod")
    once = dict(inst)
    restore_default_value(inst, cfg, "pollPeriod")
    assert inst == once == {"pollPeriod": 3000}


def test_restore_default_value_noops() -> None:
    inst = {"pollPeriod": 5}
    restore_default_value(inst, Descriptor(name="other", default=1), "pollPeriod")
    restore_default_value(inst, Descriptor(name="pollPeriod"), "pollPeriod")
    assert inst == {"pollPeriod": 5}


def test_restore_default_value_copies_list_defaults() -> None:
    cfg = Descriptor(name="channelMask", default=[0])
    inst: dict[str, object] = {}
    restore_default_value(inst, cfg, "channelMask")
    inst["channelMask"].append(5)  # type: ignore[attr-defined]
    assert cfg.default == [0]
