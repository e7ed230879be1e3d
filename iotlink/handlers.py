"""Virtual pin handler registry and the LED and RTC widgets built on it."""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Callable, Iterable

log = logging.getLogger(__name__)

DEFAULT_PIN_COUNT = 32
EXTENDED_PIN_COUNT = 128

# Jan 1 2013: smaller timestamps from the server are not a real time.
RTC_MIN_TIME = 1357041600

ReadHandler = Callable[[int], object]
WriteHandler = Callable[[int, list], object]
InternalHandler = Callable[[list], object]
Callback = Callable[[], object]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _as_long(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _as_values(values: Iterable[str] | str) -> list[str]:
    if isinstance(values, str):
        return values.split("\0") if values else []
    return [str(value) for value in values]


class InternalPin(enum.Enum):
    """Internal pins the server writes to, named as on the wire."""

    ACON = "acon"
    ADIS = "adis"
    RTC = "rtc"
    UTC = "utc"
    OTA = "ota"
    META = "meta"
    VFS = "vfs"
    DBG = "dbg"


def _no_handler_read(pin: int) -> None:
    log.info("No handler for reading from pin %d", pin)


def _no_handler_write(pin: int, values: list) -> None:
    log.info("No handler for writing to pin %d", pin)


class HandlerRegistry:
    """Maps virtual pins and internal pins to the functions that serve them.

    A pin without its own handler falls back to the default handler, which
    ``on_read(None)`` / ``on_write(None)`` can replace. Pins at or beyond
    ``pin_count`` have no handler at all.
    """

    def __init__(self, pin_count: int = DEFAULT_PIN_COUNT) -> None:
        if pin_count <= 0:
            raise ValueError("pin_count must be positive")
        self.pin_count = pin_count
        self._read: dict[int, ReadHandler] = {}
        self._write: dict[int, WriteHandler] = {}
        self._internal: dict[InternalPin, InternalHandler] = {}
        self._default_read: ReadHandler = _no_handler_read
        self._default_write: WriteHandler = _no_handler_write
        self._on_connected: Callback | None = None
        self._on_disconnected: Callback | None = None

    def _check_pin(self, pin: int) -> int:
        pin = int(pin)
        if not 0 <= pin < self.pin_count:
            raise ValueError(f"pin {pin} out of range 0..{self.pin_count - 1}")
        return pin

    def on_read(self, pin: int | None) -> Callable[[ReadHandler], ReadHandler]:
        """Decorator registering a read handler; ``None`` sets the default."""
        key = None if pin is None else self._check_pin(pin)

        def register(func: ReadHandler) -> ReadHandler:
            if key is None:
                self._default_read = func
            else:
                self._read[key] = func
            return func

        return register

    def on_write(self, pin: int | None) -> Callable[[WriteHandler], WriteHandler]:
        """Decorator registering a write handler; ``None`` sets the default."""
        key = None if pin is None else self._check_pin(pin)

        def register(func: WriteHandler) -> WriteHandler:
            if key is None:
                self._default_write = func
            else:
                self._write[key] = func
            return func

        return register

    def on_internal(
        self, name: InternalPin | str
    ) -> Callable[[InternalHandler], InternalHandler]:
        """Decorator registering the handler of an internal pin."""
        key = InternalPin(name)

        def register(func: InternalHandler) -> InternalHandler:
            self._internal[key] = func
            return func

        return register

    def on_connected(self, func: Callback) -> Callback:
        self._on_connected = func
        return func

    def on_disconnected(self, func: Callback) -> Callback:
        self._on_disconnected = func
        return func

    def read_handler(self, pin: int) -> ReadHandler | None:
        """The handler for reading ``pin``, or None if the pin has none."""
        if not 0 <= pin < self.pin_count:
            return None
        return self._read.get(pin, self._default_read)

    def write_handler(self, pin: int) -> WriteHandler | None:
        """The handler for writing ``pin``, or None if the pin has none."""
        if not 0 <= pin < self.pin_count:
            return None
        return self._write.get(pin, self._default_write)

    def call_read(self, pin: int) -> bool:
        """Run the read handler of ``pin``; False if the pin has no handler."""
        handler = self.read_handler(pin)
        if handler is None:
            return False
        handler(pin)
        return True

    def call_write(self, pin: int, values: Iterable[str] | str) -> bool:
        """Run the write handler of ``pin``; False if the pin has no handler."""
        handler = self.write_handler(pin)
        if handler is None:
            return False
        handler(pin, _as_values(values))
        return True

    def call_internal(self, name: InternalPin | str, values: Iterable[str] | str) -> bool:
        """Run the handler of an internal pin; False if none is registered."""
        try:
            key = InternalPin(name)
        except ValueError:
            log.debug("Invalid internal cmd: %s", name)
            return False
        handler = self._internal.get(key)
        if handler is None:
            log.info("No handler for writing to pin %s", key.value)
            return False
        handler(_as_values(values))
        return True

    def connected(self) -> None:
        if self._on_connected is not None:
            self._on_connected()

    def disconnected(self) -> None:
        if self._on_disconnected is not None:
            self._on_disconnected()


class LedWidget:
    """An LED widget on a virtual pin, with brightness 0..255."""

    def __init__(self, pin: int, writer: Callable[[int, int], object]) -> None:
        self.pin = pin
        self._writer = writer
        self._value = 0

    def value(self) -> int:
        return self._value

    def set_value(self, value: int) -> None:
        self._value = int(value) & 0xFF
        self._writer(self.pin, self._value)

    def on(self) -> None:
        self.set_value(255)

    def off(self) -> None:
        self.set_value(0)


class RtcWidget:
    """Keeps a clock in step with the time the server sends."""

    def __init__(
        self,
        send_internal: Callable[[str, str], object],
        set_time: Callable[[int], object],
    ) -> None:
        self._send_internal = send_internal
        self._set_time = set_time

    def request_sync(self) -> int:
        """Ask the server for the time; it arrives later, so return 0."""
        self._send_internal("rtc", "sync")
        return 0

    def handle(self, values: Iterable[str] | str) -> bool:
        """Apply a time received on the RTC pin; False if it is not valid."""
        parts = _as_values(values)
        timestamp = _as_long(parts[0]) if parts else 0
        if timestamp < RTC_MIN_TIME:
            return False
        self._set_time(timestamp)
        log.info("Time sync: OK")
        return True