from __future__ import annotations

from stackconf.core.board import BoardSession
from stackconf.core.model import DeviceContext, ValidationResult
from stackconf.modules import network


def _validate(**values: object) -> ValidationResult:
    inst: dict[str, object] = {"panID": 0xFFFF, "channelMask": [0]}
    inst.update(values)
    result = ValidationResult()
    network.validate(inst, result)
    return result


def test_defaults_are_valid() -> None:
    assert _validate().records == []


def test_pan_id_range_uses_hex_bounds() -> None:
    result = _validate(panID=0x10000)
    assert [r.message for r in result.errors] == ["Must be between 0x0 and 0xFFFF"]


def test_empty_channel_mask() -> None:
    result = _validate(channelMask=[])
    assert [r.message for r in result.errors] == ["At least one channel must be selected"]


def test_out_of_range_channel() -> None:
    result = _validate(channelMask=[3, 136])
    assert [r.field for r in result.errors] == ["channelMask"]
    assert "136" in result.errors[0].message


def test_repeated_channel_is_warning() -> None:
    result = _validate(channelMask=[1, 1])
    assert not result.has_errors
    assert len(result.warnings) == 1


def test_errors_accumulate_across_fields() -> None:
    result = _validate(panID=-1, channelMask="all")
    assert {r.field for r in result.errors} == {"panID", "channelMask"}
    assert len(result.errors) == 3


def test_channel_mask_hex() -> None:
    assert network.channel_mask_hex({"channelMask": [1, 8]})[:3] == ["0x02", "0x01", "0x00"]


def test_channels_outside_24ghz_band_on_24ghz_board() -> None:
    session = BoardSession.open(DeviceContext("CC2652RB"))
    inst = {"panID": 0xFFFF, "channelMask": [11, 5, 27, 26]}
    result = ValidationResult()
    network.validate(inst, result, session)
    assert [r.message for r in result.errors] == [
        "Channels 5, 27 are not available on CC2652RB_LAUNCHXL (2.4 GHz only: 11-26)"
    ]


def test_sub1ghz_board_keeps_full_channel_range() -> None:
    session = BoardSession.open(DeviceContext("CC1312R1"))
    inst = {"panID": 0xFFFF, "channelMask": [0, 5, 128]}
    result = ValidationResult()
    network.validate(inst, result, session)
    assert result.records == []
