# =============================================================================
# byte_encoder.py — Little-endian integer emitters
# =============================================================================
#
# Appends fixed-width integers to an output bytearray, least-significant byte
# first.  Values are masked to the field width, never range-checked: the WAV
# header and sample writers only pass values that fit, and masking is the
# agreed overflow rule (a negative int16 sample becomes its two's complement).

import struct


def write_int16(buf: bytearray, value: int) -> None:
    """Append the low 16 bits of `value` as 2 bytes, LSB first."""
    buf += struct.pack("<H", value & 0xFFFF)


def write_int32(buf: bytearray, value: int) -> None:
    """Append the low 32 bits of `value` as 4 bytes, LSB first."""
    buf += struct.pack("<I", value & 0xFFFFFFFF)


def stereo_pair(value: int) -> bytes:
    """
    One 16-bit stereo sample pair with the same value on both channels.

    Returns 4 bytes: [L lo, L hi, R lo, R hi].
    """
    pair = bytearray()
    write_int16(pair, value)   # left
    write_int16(pair, value)   # right
    return bytes(pair)
