"""Binary layouts that serialize a record into its raw bytes."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod

from logweave.record import Record

_FNV_PRIME = 16777619
_OFFSET_BASIS = 2166136261
_U32 = 0xFFFFFFFF
_U64 = 0xFFFFFFFFFFFFFFFF

_SIZE = struct.Struct("<I")
_HEAD = struct.Struct("<QQB")
_HASHES = struct.Struct("<II")


class Layout(ABC):
    """Base class for record layouts."""

    @abstractmethod
    def layout_record(self, record: Record) -> None:
        """Fill ``record.raw`` with the formatted record."""


def hash_message(message: str | bytes) -> int:
    """Return the 32-bit FNV-1a hash of a string (UTF-8) or bytes."""
    data = message.encode("utf-8") if isinstance(message, str) else bytes(message)
    value = _OFFSET_BASIS
    for byte in data:
        value = ((value ^ byte) * _FNV_PRIME) & _U32
    return value


def _head(record: Record) -> bytes:
    return _HEAD.pack(record.timestamp & _U64, record.thread & _U64, int(record.level) & 0xFF)


def _buffer_part(record: Record) -> bytes:
    buffer = bytes(record.buffer)
    if len(buffer) > _U32:
        raise ValueError("record buffer is too large")
    return _SIZE.pack(len(buffer)) + buffer


def _framed(body: bytes) -> bytes:
    return _SIZE.pack(len(body)) + body


class BinaryLayout(Layout):
    """Little-endian binary layout.

    Frame: u32 size, u64 timestamp, u64 thread, u8 level, u8 logger length,
    logger, u16 message length, message, u32 buffer length, buffer.
    """

    def layout_record(self, record: Record) -> None:
        logger = record.logger.encode("utf-8")
        message = record.message.encode("utf-8")
        if len(logger) > 0xFF:
            raise ValueError("logger name is longer than 255 bytes")
        if len(message) > 0xFFFF:
            raise ValueError("message is longer than 65535 bytes")
        body = b"".join(
            (
                _head(record),
                struct.pack("<B", len(logger)),
                logger,
                struct.pack("<H", len(message)),
                message,
                _buffer_part(record),
            )
        )
        record.raw = _framed(body)


class HashLayout(Layout):
    """Binary layout storing FNV-1a hashes instead of logger and message text.

    Frame: u32 size, u64 timestamp, u64 thread, u8 level, u32 logger hash,
    u32 message hash, u32 buffer length, buffer.
    """

    def layout_record(self, record: Record) -> None:
        body = b"".join(
            (
                _head(record),
                _HASHES.pack(hash_message(record.logger), hash_message(record.message)),
                _buffer_part(record),
            )
        )
        record.raw = _framed(body)