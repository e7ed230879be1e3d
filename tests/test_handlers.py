import logging

import pytest

from iotlink.handlers import (
    RTC_MIN_TIME,
    HandlerRegistry,
    InternalPin,
    LedWidget,
    RtcWidget,
)


def test_write_handler_receives_pin_and_values():
    registry = HandlerRegistry()
    seen = []

    @registry.on_write(5)
    def handler(pin, values):
        seen.append((pin, values))

    assert registry.call_write(5, ["1", "2"]) is True
    assert seen == [(5, ["1", "2"])]


def test_write_values_split_on_nul():
    registry = HandlerRegistry()
    seen = []
    registry.on_write(1)(lambda pin, values: seen.append(values))
    registry.call_write(1, "a\0b")
    assert seen == [["a", "b"]]


def test_read_handler_called():
    registry = HandlerRegistry()
    seen = []
    registry.on_read(0)(seen.append)
    assert registry.call_read(0) is True
    assert seen == [0]


def test_default_read_logs(caplog):
    registry = HandlerRegistry()
    with caplog.at_level(logging.INFO, logger="iotlink.handlers"):
        assert registry.call_read(3) is True
    assert "No handler for reading from pin 3" in caplog.text


def test_default_write_logs(caplog):
    registry = HandlerRegistry()
    with caplog.at_level(logging.INFO, logger="iotlink.handlers"):
        registry.call_write(7, ["x"])
    assert "No handler for writing to pin 7" in caplog.text


def test_custom_default_handler():
    registry = HandlerRegistry()
    seen = []
    registry.on_read(None)(seen.append)
    registry.call_read(9)
    assert seen == [9]


def test_out_of_range_pin_has_no_handler():
    registry = HandlerRegistry()
    assert registry.read_handler(32) is None
    assert registry.write_handler(32) is None
    assert registry.call_read(32) is False
    assert registry.call_write(40, []) is False


def test_extended_pin_count():
    registry = HandlerRegistry(128)
    seen = []
    registry.on_write(127)(lambda pin, values: seen.append(pin))
    assert registry.call_write(127, []) is True
    assert seen == [127]
    assert registry.read_handler(128) is None


def test_register_out_of_range_raises():
    registry = HandlerRegistry()
    with pytest.raises(ValueError):
        registry.on_read(32)


def test_internal_dispatch_by_name_and_enum():
    registry = HandlerRegistry()
    seen = []
    registry.on_internal(InternalPin.UTC)(seen.append)
    assert registry.call_internal("utc", ["1"]) is True
    assert registry.call_internal(InternalPin.UTC, ["2"]) is True
    assert seen == [["1"], ["2"]]


def test_internal_unknown_or_unregistered():
    registry = HandlerRegistry()
    assert registry.call_internal("nope", []) is False
    assert registry.call_internal(InternalPin.OTA, []) is False


def test_connected_callbacks():
    registry = HandlerRegistry()
    events = []
    registry.connected()
    registry.on_connected(lambda: events.append("up"))
    registry.on_disconnected(lambda: events.append("down"))
    registry.connected()
    registry.disconnected()
    assert events == ["up", "down"]


def test_led_widget():
    writes = []
    led = LedWidget(4, lambda pin, value: writes.append((pin, value)))
    assert led.value() == 0
    led.on()
    assert led.value() == 255
    led.off()
    led.set_value(100)
    assert writes == [(4, 255), (4, 0), (4, 100)]


def test_rtc_request_sync():
    sent = []
    rtc = RtcWidget(lambda a, b: sent.append((a, b)), lambda t: None)
    assert rtc.request_sync() == 0
    assert sent == [("rtc", "sync")]


def test_rtc_accepts_valid_time():
    times = []
    rtc = RtcWidget(lambda a, b: None, times.append)
    assert rtc.handle([str(RTC_MIN_TIME)]) is True
    assert times == [RTC_MIN_TIME]


def test_rtc_rejects_old_or_empty_time():
    times = []
    rtc = RtcWidget(lambda a, b: None, times.append)
    assert rtc.handle([str(RTC_MIN_TIME - 1)]) is False
    assert rtc.handle([]) is False
    assert times == []


def test_rtc_via_registry():
    times = []
    registry = HandlerRegistry()
    rtc = RtcWidget(lambda a, b: None, times.append)
    registry.on_internal(InternalPin.RTC)(rtc.handle)
    registry.call_internal("rtc", "1357041600")
    assert times == [1357041600]