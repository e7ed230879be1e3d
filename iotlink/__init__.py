"""Time values, time-input decoding, periodic timers, OTA updates, a TCP transport and pin handlers."""

__version__ = "0.1.0"