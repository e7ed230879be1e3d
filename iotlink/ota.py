"""Firmware update receiver: chunked transfer checked with CRC-32."""

from __future__ import annotations

import enum
import logging
import zlib
from collections.abc import Callable
from typing import Protocol

log = logging.getLogger(__name__)

START_CHUNK_SIZE = 1024


def crc32(data: bytes, previous: int = 0) -> int:
    """CRC-32 (reflected polynomial 0xEDB88320), continuing from ``previous``."""
    return zlib.crc32(bytes(data), previous & 0xFFFFFFFF) & 0xFFFFFFFF


class OtaState(enum.Enum):
    IDLE = 0
    PREFETCH = 1
    START = 2
    IN_PROGRESS = 3
    APPLY = 4


class OtaError(Exception):
    """An update was refused or failed verification."""


class Storage(Protocol):
    max_size: int

    def open(self, size: int) -> bool: ...

    def write(self, data: bytes) -> bool: ...

    def close(self) -> None: ...

    def apply(self) -> object: ...


class MemoryStorage:
    """Keeps the incoming firmware image in memory."""

    def __init__(self, max_size: int = 0) -> None:
        self.max_size = max_size
        self.data = bytearray()
        self.expected = 0
        self.is_open = False
        self.applied: bytes | None = None

    def open(self, size: int) -> bool:
        if size > self.max_size:
            return False
        self.data = bytearray()
        self.expected = size
        self.is_open = True
        return True

    def write(self, data: bytes) -> bool:
        if not self.is_open or len(self.data) + len(data) > self.expected:
            return False
        self.data += data
        return True

    def close(self) -> None:
        self.is_open = False

    def apply(self) -> bytes:
        """Install the received image and return it."""
        self.applied = bytes(self.data)
        return self.applied


class OtaUpdater:
    """Receives an update offered by the network co-processor.

    ``prefetch``, when given, is called once before the transfer starts and
    returns whether the co-processor fetched the image successfully.
    """

    def __init__(
        self, storage: Storage, prefetch: Callable[[], bool] | None = None
    ) -> None:
        self.storage = storage
        self._prefetch = prefetch
        self.state = OtaState.IDLE
        self.size = 0
        self.offset = 0
        self.crc = 0
        self.progress = 0

    def update_available(
        self,
        filename: str,
        filesize: int,
        fw_type: str = "",
        fw_ver: str = "",
        fw_build: str = "",
    ) -> None:
        """Accept an offered update, preparing the storage for it."""
        max_size = self.storage.max_size
        if not max_size:
            raise OtaError("OTA is not supported")

        percent = filesize * 100 // max_size
        log.info(
            "OTA update: %s size: %d (%d%%), type: %s, version: %s, build: %s",
            filename, filesize, percent, fw_type, fw_ver, fw_build,
        )

        if filesize == 0 or filesize > max_size:
            raise OtaError("File size is invalid")

        if not self.storage.open(filesize):
            raise OtaError("Starting OTA failed")

        log.info("Starting OTA")
        self.size = filesize
        self.offset = 0
        self.crc = 0
        self.progress = 0
        self.state = OtaState.PREFETCH if self._prefetch is not None else OtaState.START

    def write_chunk(self, offset: int, chunk: bytes, expected_crc: int) -> int:
        """Store one chunk; return the number of bytes received so far."""
        chunk = bytes(chunk)
        if crc32(chunk) != expected_crc:
            raise OtaError("Chunk CRC32 mismatch")
        if offset != self.offset:
            raise OtaError("Offset mismatch")
        if not self.storage.write(chunk):
            raise OtaError("Storage write failed")

        self.crc = crc32(chunk, self.crc)
        self.offset += len(chunk)

        if self.size:
            progress = self.offset * 100 // self.size
            if progress - self.progress >= 5 or progress == 100:
                self.progress = progress
                log.info("Updating MCU... %d%%", progress)
        return self.offset

    def finish(self, expected_crc: int | None) -> int:
        """Verify the whole image and schedule it to be applied."""
        if self.offset != self.size:
            raise OtaError("File size mismatch")
        if expected_crc is None:
            raise OtaError("Cannot get CRC32")
        if expected_crc != self.crc:
            raise OtaError(
                f"CRC32 check failed (expected: {expected_crc:08x}, actual: {self.crc:08x})"
            )
        log.info("CRC32 verified: %08x", self.crc)
        self.storage.close()
        self.state = OtaState.APPLY
        return self.crc

    def cancel(self) -> None:
        log.info("OTA canceled")
        self.storage.close()

    def run(self, start_transfer: Callable[[int], object] | None = None) -> OtaState:
        """Advance the update by one step and return the new state."""
        if self.state is OtaState.PREFETCH and self._prefetch is not None:
            if self._prefetch():
                log.info("OTA prefetch OK")
            else:
                log.warning("OTA prefetch FAILED")
            self.state = OtaState.START
        elif self.state is OtaState.START:
            if start_transfer is not None:
                start_transfer(START_CHUNK_SIZE)
            self.state = OtaState.IN_PROGRESS
        elif self.state is OtaState.APPLY:
            log.info("Applying the update")
            self.state = OtaState.IDLE
            self.storage.apply()
        return self.state