from iotlink.datetime import TimeOfDay
from iotlink.timeinput import TimeInputParam, TimeMode


def test_empty_param_is_undefined_with_all_days():
    param = TimeInputParam([])
    assert param.start_mode is TimeMode.UNDEFINED
    assert param.stop_mode is TimeMode.UNDEFINED
    assert not param.has_start_time() and not param.has_stop_time()
    assert not param.start.is_valid()
    assert param.tz == ""
    assert param.tz_offset == 0
    assert all(param.is_weekday_selected(day) for day in range(1, 8))


def test_empty_string_is_empty_param():
    param = TimeInputParam("")
    assert param.start_mode is TimeMode.UNDEFINED
    assert all(param.is_weekday_selected(day) for day in range(1, 8))


def test_sunrise_and_sunset():
    param = TimeInputParam(["sr", "ss"])
    assert param.is_start_sunrise() and not param.is_start_sunset()
    assert param.is_stop_sunset() and not param.is_stop_sunrise()
    assert param.start_mode is TimeMode.SUNRISE
    assert param.stop_mode is TimeMode.SUNSET


def test_specified_times():
    param = TimeInputParam(["3600", "7260"])
    assert param.has_start_time()
    assert param.has_stop_time()
    assert param.start == TimeOfDay.from_hms(1, 0, 0)
    assert param.stop == TimeOfDay.from_hms(2, 1, 0)


def test_empty_start_leaves_undefined():
    param = TimeInputParam(["", "60"])
    assert param.start_mode is TimeMode.UNDEFINED
    assert param.has_stop_time()
    assert param.stop.minute() == 1


def test_full_param_from_nul_separated_string():
    param = TimeInputParam("sr\0" "3600\0" "Europe/Kyiv\0" "1,3,7\0" "7200")
    assert param.is_start_sunrise()
    assert param.stop == TimeOfDay(3600)
    assert param.tz == "Europe/Kyiv"
    assert param.tz_offset == 7200
    assert param.is_weekday_selected(1)
    assert param.is_weekday_selected(3)
    assert param.is_weekday_selected(7)
    assert not param.is_weekday_selected(2)
    assert not param.is_weekday_selected(6)


def test_weekday_index_wraps():
    param = TimeInputParam(["", "", "UTC", "1"])
    assert param.is_weekday_selected(8) == param.is_weekday_selected(1)
    assert param.is_weekday_selected(8)


def test_empty_weekdays_keeps_all_selected():
    param = TimeInputParam(["", "", "UTC", ""])
    assert all(param.is_weekday_selected(day) for day in range(1, 8))


def test_weekdays_ignore_other_characters():
    param = TimeInputParam(["", "", "UTC", "0,8,x,5"])
    selected = [day for day in range(1, 8) if param.is_weekday_selected(day)]
    assert selected == [5]


def test_tz_truncated():
    zone = "Z" * 40
    param = TimeInputParam(["", "", zone])
    assert param.tz == zone[:32]


def test_negative_tz_offset_and_lenient_number():
    param = TimeInputParam(["", "", "UTC", "", "-3600"])
    assert param.tz_offset == -3600
    param = TimeInputParam(["", "", "UTC", "", "abc"])
    assert param.tz_offset == 0