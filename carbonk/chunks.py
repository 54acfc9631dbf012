"""Tagged binary chunks: a 4-byte magic, a 4-byte payload size, then packed records."""

from __future__ import annotations

import struct
from typing import BinaryIO, Iterable

_HEADER = struct.Struct("<4sI")
_BYTE_ORDER_MARKS = ("@", "=", "<", ">", "!")


class ChunkError(ValueError):
    """Raised when a chunk is malformed or is not the chunk that was expected."""


def _magic_bytes(magic: str | bytes) -> bytes:
    return magic.encode("ascii") if isinstance(magic, str) else bytes(magic)


def _record_struct(record_format: str) -> struct.Struct:
    if not record_format.startswith(_BYTE_ORDER_MARKS):
        record_format = "<" + record_format
    record = struct.Struct(record_format)
    if record.size == 0:
        raise ValueError(f"record format {record_format!r} describes empty records")
    return record


def _read_exact(stream: BinaryIO, size: int) -> bytes | None:
    data = stream.read(size)
    if data is None or len(data) != size:
        return None
    return data


def read_chunk(stream: BinaryIO, magic: str | bytes, record_format: str | None):
    """Read one chunk from ``stream``.

    ``record_format`` is a :mod:`struct` format for one record (little-endian
    unless it says otherwise); the records are returned as a list of tuples.
    With ``record_format=None`` the payload is returned as raw bytes.
    """
    header = _read_exact(stream, _HEADER.size)
    if header is None:
        raise ChunkError("Failed to read chunk header")
    found_magic, size = _HEADER.unpack(header)
    if found_magic != _magic_bytes(magic):
        raise ChunkError("Unexpected magic number in chunk")

    record = None if record_format is None else _record_struct(record_format)
    element_size = 1 if record is None else record.size
    if size % element_size != 0:
        raise ChunkError("Size of chunk not divisible by element size")

    payload = _read_exact(stream, size)
    if payload is None:
        raise ChunkError("Failed to read chunk data.")
    if record is None:
        return payload
    return list(record.iter_unpack(payload))


def write_chunk(
    stream: BinaryIO,
    magic: str | bytes,
    record_format: str | None,
    records: Iterable,
) -> None:
    """Write ``records`` as one chunk in the layout :func:`read_chunk` reads.

    With ``record_format=None`` ``records`` is a bytes-like payload.
    """
    magic_bytes = _magic_bytes(magic)
    if len(magic_bytes) != 4:
        raise ChunkError(f"chunk magic must be 4 bytes, got {magic_bytes!r}")
    if record_format is None:
        payload = bytes(records)
    else:
        record = _record_struct(record_format)
        payload = b"".join(record.pack(*fields) for fields in records)
    stream.write(_HEADER.pack(magic_bytes, len(payload)))
    stream.write(payload)