# iotlink

Device-side building blocks for a cloud-connected IoT client, written in
plain Python with no third-party dependencies.

## Modules

- `iotlink.datetime`
  - `TimeOfDay` holds seconds since midnight. Build it with
    `TimeOfDay(seconds)`, `TimeOfDay.from_hms(h, m, s)` or
    `TimeOfDay.invalid()`. It offers `hour()`, `minute()`, `second()`,
    `hour12()`, `is_am()`/`is_pm()`, `adjust_seconds()`, which wraps around
    midnight, `unix_offset()` and `is_valid()`. Values compare and are
    truthy only when valid.
  - `DateTime` holds UTC Unix seconds, and zero means invalid. Build it with
    `DateTime(timestamp)`, `DateTime.from_fields(...)`,
    `DateTime.combine(time, date)` or `DateTime.invalid()`. It offers
    calendar accessors, `weekday()` (0 = Sunday), `day_of_week()`
    (1 = Monday … 7 = Sunday), `dow_str()` and `week_of_year()`. It also
    offers `secs_today()`, `secs_this_week()`, `prev_midnight()`,
    `next_midnight()`, `prev_sunday()` and `next_sunday()`.
  - `is_time_valid(ts)` is True only for times after 1 January 2021.
- `iotlink.timeinput`
  - `TimeInputParam(values)` decodes the values of a time-input widget.
    `values` is a list of strings or one NUL-separated string. It reads the
    start and stop times (seconds, `"sr"` for sunrise, `"ss"` for sunset),
    the time zone name (`tz`, at most 32 characters), the selected weekdays
    and the offset (`tz_offset`).
  - `TimeMode` gives the mode of each point.
  - Query the result with `has_start_time()`, `is_start_sunrise()`,
    `is_weekday_selected(day)` and the like.
- `iotlink.periodic`
  - `Periodic(period, clock)` is truthy (`ready()`) once per period and
    then restarts. `trigger()` makes the next check fire. Counter
    arithmetic wraps, so a rolling-over clock is handled.
  - The factories are `every_n_millis`, `every_n_seconds`,
    `every_n_minutes` and `every_n_hours`. Each takes a millisecond clock,
    which defaults to a monotonic clock.
- `iotlink.ota`
  - `crc32(data, previous)` gives a CRC-32 that continues from
    `previous`.
  - `OtaUpdater` receives a chunked firmware image into a storage such as
    `MemoryStorage`. The steps are:
    - `update_available(...)` accepts an offered update.
    - `write_chunk(offset, chunk, crc)` checks each chunk's CRC and
      offset.
    - `finish(crc)` verifies the whole image.
    - `cancel()` abandons the update.
    - `run()` steps through the `OtaState` values and applies the image
      in the `APPLY` state.
  - Failures raise `OtaError`.
- `iotlink.client`
  - `TcpClient` is a socket transport with `begin(host, port)`,
    `connect()`, `disconnect()`, `read(size)`, `write(data)`,
    `connected()` and `available()`.
  - `read` waits at most `timeout` seconds.
  - When a connection to port 80 or 8080 fails, `connect()` tries the
    other port.
  - `retry_send=True` makes `write` retry partial sends, up to 9 tries in
    all.
  - A custom `connector` can replace `socket.create_connection`.
- `iotlink.handlers`
  - `HandlerRegistry` maps virtual pins (`0 … pin_count-1`) and internal
    pins (`InternalPin`) to handlers, which you register with decorators.
  - A pin without its own handler falls back to a default handler, which
    only logs. Pins outside the range have no handler.
  - `call_read`, `call_write` and `call_internal` dispatch to the handlers.
    `connected()` and `disconnected()` run the connection callbacks.
  - `LedWidget` keeps a 0–255 value and writes it through a callback.
  - `RtcWidget` requests a time sync. It passes on received timestamps
    that are not earlier than 1 January 2013.

## Installation

```
pip install .
```

## Examples

```python
from iotlink.periodic import every_n_seconds

now_ms = 0
tick = every_n_seconds(5, clock=lambda: now_ms)
now_ms = 5000
if tick:
    print("five seconds passed")
```

```python
from iotlink.handlers import HandlerRegistry, LedWidget

registry = HandlerRegistry(pin_count=32)

@registry.on_write(3)
def brightness(pin, values):
    print(f"V{pin} <-", values)

registry.call_write(3, ["128"])

led = LedWidget(pin=5, writer=lambda pin, value: print(pin, value))
led.on()
```

```python
from iotlink.ota import MemoryStorage, OtaUpdater, crc32

image = b"firmware bytes"
updater = OtaUpdater(MemoryStorage(max_size=1024))
updater.update_available("fw.bin", len(image))
updater.write_chunk(0, image, crc32(image))
updater.finish(crc32(image))
updater.run()  # applies the image to the storage
```

## What this package does not do

The package has no device state machine. It does not drive a status LED
and does not handle a reset button. It has no provisioning or Wi-Fi setup
mode and stores no configuration. It does not download firmware over HTTP
itself. It does not implement the cloud messaging protocol. It provides
the pieces listed above, and you wire them to your own transport and
hardware. It installs no command-line program.

## Running the tests

```
pip install .[test]
pytest
```