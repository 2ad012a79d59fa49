"""Binary stdin/stdout framing for the editor protocol.

Each message is a 7-byte header followed by a MessagePack payload:

    version (uint16, big-endian) | flags (uint8) | length (uint32, big-endian)

Payloads over 1KB are zlib-compressed when that makes them smaller. All I/O
goes through raw binary buffers (sys.stdin.buffer / sys.stdout.buffer); stdout
is reserved for protocol frames, diagnostics go to stderr.
"""

from __future__ import annotations

import struct
import sys
import zlib

from typing import IO, Any

import msgpack

from core.constants import COMPRESSION_THRESHOLD, FLAG_COMPRESSED, MAX_MESSAGE_SIZE, PROTOCOL_VERSION
from utils.logger import logger

HEADER = struct.Struct("!HBI")


class BinaryIOError(Exception):
    """Raised when binary I/O operations fail."""


def encode_frame(message: dict[str, Any]) -> bytes:
    """Encode ``message`` into a complete frame (header + payload).

    Keys starting with ``_`` are local metadata and are not sent.

    Raises:
        BinaryIOError: If the message cannot be packed or is too large
    """
    body = {k: v for k, v in message.items() if not k.startswith("_")}
    try:
        payload = msgpack.packb(body, use_bin_type=True)
    except (TypeError, ValueError, OverflowError) as e:
        raise BinaryIOError(f"MessagePack encode failed: {e}") from e

    flags = 0
    if len(payload) > COMPRESSION_THRESHOLD:
        compressed = zlib.compress(payload, level=6)
        if len(compressed) < len(payload):
            payload = compressed
            flags |= FLAG_COMPRESSED

    if len(payload) > MAX_MESSAGE_SIZE:
        raise BinaryIOError(f"Message too large: {len(payload)} bytes (max {MAX_MESSAGE_SIZE})")

    return HEADER.pack(PROTOCOL_VERSION, flags, len(payload)) + payload


def decode_payload(payload: bytes, flags: int) -> dict[str, Any]:
    """Decode a frame payload given its header flags.

    Raises:
        BinaryIOError: On decompression or MessagePack errors, or a non-dict body
    """
    if flags & FLAG_COMPRESSED:
        try:
            payload = zlib.decompress(payload)
        except zlib.error as e:
            raise BinaryIOError(f"Decompression failed: {e}") from e

    try:
        decoded = msgpack.unpackb(payload, raw=False)
    except Exception as e:
        raise BinaryIOError(f"MessagePack decode failed: {e}") from e

    if not isinstance(decoded, dict):
        raise BinaryIOError(f"Expected dict from MessagePack, got {type(decoded).__name__}")
    return decoded


def read_message(stream: IO[bytes] | None = None) -> dict[str, Any]:
    """Read one complete message from ``stream`` (default: stdin).

    Returns:
        Decoded message dictionary with ``_size`` and ``_compressed`` metadata

    Raises:
        BinaryIOError: On I/O errors or malformed messages
        EOFError: On end of stream
    """
    source = stream if stream is not None else sys.stdin.buffer

    header = source.read(HEADER.size)
    if not header:
        raise EOFError("End of input stream")
    if len(header) < HEADER.size:
        raise BinaryIOError(f"Incomplete header: got {len(header)} bytes, expected {HEADER.size}")

    version, flags, length = HEADER.unpack(header)
    if version != PROTOCOL_VERSION:
        raise BinaryIOError(f"Unsupported protocol version: {version}")
    if length > MAX_MESSAGE_SIZE:
        raise BinaryIOError(f"Message too large: {length} bytes (max {MAX_MESSAGE_SIZE})")

    payload = source.read(length)
    if len(payload) < length:
        raise BinaryIOError(f"Incomplete payload: got {len(payload)} bytes, expected {length}")

    message = decode_payload(payload, flags)
    compressed = bool(flags & FLAG_COMPRESSED)
    message["_size"] = length
    message["_compressed"] = compressed

    logger.debug(f"Read message: type={message.get('type')}, size={length}, compressed={compressed}")
    return message


def write_message(message: dict[str, Any], stream: IO[bytes] | None = None) -> None:
    """Write one complete message to ``stream`` (default: stdout).

    Raises:
        BinaryIOError: On encoding or I/O errors
    """
    target = stream if stream is not None else sys.stdout.buffer
    frame = encode_frame(message)
    try:
        target.write(frame)
        target.flush()
    except (OSError, ValueError) as e:
        logger.error(f"Failed to write message: {e}", exc_info=True)
        raise BinaryIOError(f"Write failed: {e}") from e

    logger.debug(f"Wrote message: type={message.get('type')}, size={len(frame) - HEADER.size}")


__all__ = ["HEADER", "BinaryIOError", "decode_payload", "encode_frame", "read_message", "write_message"]
