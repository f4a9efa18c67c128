# =============================================================================
# wav_header.py — Canonical 44-byte RIFF/WAVE header
# =============================================================================
#
# Layout (all integers little-endian):
#
#   offset  size  field
#   ------  ----  ---------------------------------------------------------
#      0     4    "RIFF"
#      4     4    riff length      = 44 + DATA_LENGTH - 8
#      8     4    "WAVE"
#     12     4    "fmt "
#     16     4    fmt length       = 16
#     20     2    audio format     = 1 (linear PCM)
#     22     2    channels         = 2
#     24     4    sample rate      = 44100
#     28     4    byte rate        = 176400  (44100 * 16 * 2 / 8)
#     32     2    block align      = 4       (16 * 2 / 8)
#     34     2    bits per sample  = 16
#     36     4    "data"
#     40     4    data length      = 44100 * 1400 * 4 = 246,960,000
#
# There are no inputs: every field comes from SMM/constants.py, so the header
# is the same 44 bytes on every run.

from MEE.SMM.constants import (
    SAMPLE_RATE, CHANNELS, BITS_PER_SAMPLE,
    BYTE_RATE, BLOCK_ALIGN,
    DATA_LENGTH, RIFF_LENGTH,
    FMT_LENGTH, AUDIO_FORMAT_PCM,
)
from .byte_encoder import write_int16, write_int32


def wav_header(buf: bytearray) -> None:
    """Append the 44-byte WAV header describing the fixed-length payload."""
    buf += b"RIFF"                        # riff_tag
    write_int32(buf, RIFF_LENGTH)         # riff_length
    buf += b"WAVE"                        # wave_tag
    buf += b"fmt "                        # fmt_tag
    write_int32(buf, FMT_LENGTH)          # fmt_length
    write_int16(buf, AUDIO_FORMAT_PCM)    # audio_format
    write_int16(buf, CHANNELS)            # num_channels
    write_int32(buf, SAMPLE_RATE)         # sample_rate
    write_int32(buf, BYTE_RATE)           # byte_rate
    write_int16(buf, BLOCK_ALIGN)         # block_align
    write_int16(buf, BITS_PER_SAMPLE)     # bits_per_sample
    buf += b"data"                        # data_tag
    write_int32(buf, DATA_LENGTH)         # data_length


def wav_header_bytes() -> bytes:
    """Return the header as an immutable bytes object."""
    buf = bytearray()
    wav_header(buf)
    return bytes(buf)
