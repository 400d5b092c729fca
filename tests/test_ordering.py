"""Tests for the ordering of controls."""

from pyhmdm.models import ChannelInfo, Control, ControlKind
from pyhmdm.ordering import collation_key, compare_controls, sort_controls


def make_control(control_id: str, channel: ChannelInfo | None) -> Control:
    return Control(
        id=control_id,
        state_id=control_id,
        kind=ControlKind.INFO,
        label=control_id.rsplit(".", 1)[-1],
        channel=channel,
    )


def test_controls_of_same_channel_are_ordered_by_id():
    channel = ChannelInfo(name="Dimmer", order=1)
    controls = [
        make_control("dev.1.WORKING", channel),
        make_control("dev.1.LEVEL", channel),
    ]

    ordered = sort_controls(controls, "en")

    assert [c.id for c in ordered] == ["dev.1.LEVEL", "dev.1.WORKING"]


def test_channels_are_ordered_numerically():
    controls = [
        make_control("dev.10.STATE", ChannelInfo(name="Switch 10", order=10)),
        make_control("dev.2.STATE", ChannelInfo(name="Switch 2", order=2)),
        make_control("dev.1.STATE", ChannelInfo(name="Switch 1", order=1)),
    ]

    ordered = sort_controls(controls, "en")

    assert [c.id for c in ordered] == ["dev.1.STATE", "dev.2.STATE", "dev.10.STATE"]


def test_same_order_ties_break_on_id():
    first = make_control("dev.3.B", ChannelInfo(name="Left", order=3))
    second = make_control("dev.3.A", ChannelInfo(name="Right", order=3))

    assert compare_controls(first, second, "en") > 0
    assert compare_controls(second, first, "en") < 0


def test_same_translated_name_ties_break_on_id():
    name = {"en": "Key", "de": "Taste"}
    first = make_control("dev.x.PRESS_SHORT", ChannelInfo(name=name))
    second = make_control("dev.y.PRESS_LONG", ChannelInfo(name=dict(name)))

    assert compare_controls(first, second, "de") < 0


def test_unordered_channels_compare_equal():
    first = make_control("dev.a.STATE", ChannelInfo(name="Alpha", order=None))
    second = make_control("dev.b.STATE", ChannelInfo(name="Beta", order=4))

    assert compare_controls(first, second, "en") == 0
    assert compare_controls(second, first, "en") == 0


def test_controls_without_channel_are_ordered_by_id():
    first = make_control("dev.b", None)
    second = make_control("dev.a", ChannelInfo(name="Alpha", order=1))

    assert compare_controls(first, second, "en") > 0
    assert [c.id for c in sort_controls([first, second], "en")] == ["dev.a", "dev.b"]


def test_ids_ignore_case_and_sort_punctuation_before_letters():
    channel = ChannelInfo(name="Thermostat", order=2)
    controls = [
        make_control("d.2.SETPOINT", channel),
        make_control("d.2.SET_TEMPERATURE", channel),
        make_control("d.2.control_mode", channel),
        make_control("d.2.LEVEL", channel),
    ]

    ordered = sort_controls(controls, "en")

    assert [c.id for c in ordered] == [
        "d.2.control_mode",
        "d.2.LEVEL",
        "d.2.SET_TEMPERATURE",
        "d.2.SETPOINT",
    ]


def test_collation_key_breaks_case_and_accent_ties():
    assert sorted(["Level", "level", "LEVEL"], key=collation_key) == [
        "level",
        "Level",
        "LEVEL",
    ]
    assert sorted(["eté", "Ete", "ete"], key=collation_key) == ["ete", "Ete", "eté"]
    assert sorted(["b", "A", "á"], key=collation_key) == ["A", "á", "b"]
