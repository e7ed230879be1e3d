"""TCP transport with a read timeout and alternate-port fallback."""

from __future__ import annotations

import logging
import select
import socket
import time
from collections.abc import Callable

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 6.0
_RETRY_LIMIT = 10
_RETRY_DELAY = 0.05
_ALTERNATE_PORTS = {80: 8080, 8080: 80}

Connector = Callable[[str, int, float], socket.socket]


def _default_connector(host: str, port: int, timeout: float) -> socket.socket:
    return socket.create_connection((host, port), timeout=timeout)


class TcpClient:
    """A byte stream to a server, read with a timeout like a serial stream."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        retry_send: bool = False,
        connector: Connector | None = None,
    ) -> None:
        self.timeout = timeout
        self.retry_send = retry_send
        self._connector = connector if connector is not None else _default_connector
        self.host: str | None = None
        self.port = 0
        self._sock = None
        self._is_conn = False
        self._buffer = bytearray()
        self._eof = False

    def begin(self, host: object, port: int) -> None:
        """Set the server to connect to; ``host`` is a name or an IP address."""
        self.host = str(host)
        self.port = port

    def _close_socket(self) -> None:
        if self._sock is not None:
            try:
                self._sock.close()
            except OSError:
                pass
        self._sock = None
        self._buffer.clear()
        self._eof = False

    def _connect_to_port(self, port: int) -> bool:
        if self.host is None:
            return False
        log.info("Connecting to %s:%d", self.host, port)
        try:
            sock = self._connector(self.host, port, self.timeout)
        except OSError:
            return False
        settimeout = getattr(sock, "settimeout", None)
        if settimeout is not None:
            settimeout(self.timeout)
        self._sock = sock
        return True

    def connect(self) -> bool:
        """Try to connect; ports 80 and 8080 fall back to each other."""
        self._close_socket()
        ok = self._connect_to_port(self.port)
        if not ok and self.port in _ALTERNATE_PORTS:
            ok = self._connect_to_port(_ALTERNATE_PORTS[self.port])
        self._is_conn = ok
        return ok

    def disconnect(self) -> None:
        self._is_conn = False
        self._close_socket()

    def _fill(self, wait: float) -> None:
        if self._sock is None or self._eof:
            return
        try:
            readable, _, _ = select.select([self._sock], [], [], max(wait, 0.0))
        except (OSError, ValueError, TypeError):
            self._eof = True
            return
        if not readable:
            return
        try:
            chunk = self._sock.recv(4096)
        except TimeoutError:
            return
        except OSError:
            self._eof = True
            return
        if chunk:
            self._buffer += chunk
        else:
            self._eof = True

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes, waiting at most the timeout for them."""
        deadline = time.monotonic() + self.timeout
        while len(self._buffer) < size and self._sock is not None and not self._eof:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            self._fill(remaining)
        data = bytes(self._buffer[:size])
        del self._buffer[:size]
        return data

    def write(self, data: bytes) -> int:
        """Send ``data``; return how many bytes went out."""
        data = bytes(data)
        if self._sock is None:
            return 0
        if not self.retry_send:
            try:
                self._sock.sendall(data)
            except OSError:
                return 0
            return len(data)

        sent = 0
        retry = 0
        while sent < len(data):
            retry += 1
            if retry >= _RETRY_LIMIT:
                break
            try:
                written = self._sock.send(data[sent:])
            except OSError:
                written = 0
            if written > 0:
                sent += written
            else:
                time.sleep(_RETRY_DELAY)
                log.debug("Retry %d send: %d/%d", retry, sent, len(data))
        return sent

    def connected(self) -> bool:
        if not self._is_conn or self._sock is None:
            return False
        self._fill(0)
        return not self._eof or bool(self._buffer)

    def available(self) -> int:
        """Number of bytes that can be read without waiting."""
        self._fill(0)
        return len(self._buffer)