# =============================================================================
# wav_inspect.py — Engraving WAV inspection
# =============================================================================
#
# Two independent views of a generated file:
#
#   parse_wav_header() / check_header()
#       Byte-level.  Reads the 44-byte header with struct and compares every
#       field against SMM/constants.py.  Does not trust any WAV library,
#       because the header layout itself is what the burner depends on.
#
#   pattern_profile() / classify()
#       Sample-level.  Streams the payload through soundfile in blocks and
#       collects what tells the three patterns apart: L/R symmetry, peak and
#       RMS level, the byte-value histogram and the number of equal-byte runs.
#
#         pattern  byte values      L == R   byte runs
#         -------  ---------------  -------  ------------------------------
#         pitch    many             yes      ~ every sample
#         bands    0x40, 0x45 only  yes      = band count
#         pie      0x40, 0x45 only  no       ~ slices * revolutions (~10^4)
#
#       Pie slices end on arbitrary byte offsets, so frames straddling a
#       slice edge carry different L and R values.
# =============================================================================

from __future__ import annotations
import struct
from typing import NamedTuple

import numpy as np
import soundfile as sf

from MEE.SMM.constants import (
    SAMPLE_RATE, CHANNELS, BITS_PER_SAMPLE,
    BYTE_RATE, BLOCK_ALIGN,
    WAV_HEADER_SIZE, DATA_LENGTH, RIFF_LENGTH, TOTAL_LENGTH,
    FMT_LENGTH, AUDIO_FORMAT_PCM,
    DARK_BYTE, LIGHT_BYTE,
    Pattern,
)

_HEADER_STRUCT = struct.Struct("<4sI4s4sIHHIIHH4sI")

# A two-level payload with more byte runs than this is a pie even if every
# frame happens to be L == R.  8 bands give 8 runs; a full pie ~10^4.
BAND_RUN_LIMIT = 1_000

# A calibration tone at full scale peaks near 0x7FFF.
TONE_MIN_PEAK = 30_000

# 10 s of audio per soundfile block
BLOCK_FRAMES = SAMPLE_RATE * 10


class WavInfo(NamedTuple):
    riff_tag:        bytes
    riff_length:     int
    wave_tag:        bytes
    fmt_tag:         bytes
    fmt_length:      int
    audio_format:    int
    channels:        int
    sample_rate:     int
    byte_rate:       int
    block_align:     int
    bits_per_sample: int
    data_tag:        bytes
    data_length:     int


class PatternProfile(NamedTuple):
    frames:          int
    peak:            list[int]      # per channel, absolute int16
    rms:             list[float]    # per channel, int16 scale
    stereo_identical: bool          # every frame has L == R
    byte_counts:     dict[int, int] # byte value -> occurrences in payload
    byte_runs:       int            # maximal runs of one repeated byte


# ── Header ───────────────────────────────────────────────────────────────────

def parse_wav_header(data: bytes) -> WavInfo:
    """
    Unpack the canonical 44-byte header at the start of `data`.

    Raises:
        ValueError: fewer than 44 bytes, or not a RIFF/WAVE file.
    """
    if len(data) < WAV_HEADER_SIZE:
        raise ValueError(
            f"WAV header needs {WAV_HEADER_SIZE} bytes, got {len(data)}"
        )
    info = WavInfo(*_HEADER_STRUCT.unpack_from(data, 0))
    if info.riff_tag != b"RIFF":
        raise ValueError("Not a RIFF file")
    if info.wave_tag != b"WAVE":
        raise ValueError("RIFF type is not WAVE")
    return info


def read_wav_header(path) -> WavInfo:
    with open(path, "rb") as f:
        return parse_wav_header(f.read(WAV_HEADER_SIZE))


def check_header(info: WavInfo, file_size: int | None = None) -> list[str]:
    """
    Compare a parsed header with the fixed engraving format.

    Returns a list of human-readable mismatches; empty means conforming.
    `file_size`, when given, is checked against TOTAL_LENGTH as well.
    """
    expected = {
        "fmt_tag":         b"fmt ",
        "fmt_length":      FMT_LENGTH,
        "audio_format":    AUDIO_FORMAT_PCM,
        "channels":        CHANNELS,
        "sample_rate":     SAMPLE_RATE,
        "byte_rate":       BYTE_RATE,
        "block_align":     BLOCK_ALIGN,
        "bits_per_sample": BITS_PER_SAMPLE,
        "data_tag":        b"data",
        "data_length":     DATA_LENGTH,
        "riff_length":     RIFF_LENGTH,
    }
    problems = []
    for field, want in expected.items():
        got = getattr(info, field)
        if got != want:
            problems.append(f"{field}: expected {want!r}, got {got!r}")
    if file_size is not None and file_size != TOTAL_LENGTH:
        problems.append(f"file size: expected {TOTAL_LENGTH}, got {file_size}")
    return problems


# ── Payload ──────────────────────────────────────────────────────────────────

def pattern_profile(path, block_frames: int = BLOCK_FRAMES) -> PatternProfile:
    """
    Stream the payload of a 16-bit WAV and collect pattern statistics.

    The payload is read as int16 frames and viewed as raw bytes again for the
    histogram and run count, so odd byte-level patterns (pie) survive intact.
    """
    info = sf.info(str(path))
    n_ch = info.channels

    frames      = 0
    peak        = np.zeros(n_ch, dtype=np.int64)
    sum_sq      = np.zeros(n_ch, dtype=np.float64)
    counts      = np.zeros(256, dtype=np.int64)
    identical   = True
    runs        = 0
    last_byte   = None

    for block in sf.blocks(str(path), blocksize=block_frames,
                           dtype="int16", always_2d=True):
        if len(block) == 0:
            continue
        frames += len(block)

        wide = block.astype(np.int64)
        peak = np.maximum(peak, np.abs(wide).max(axis=0))
        sum_sq += (wide * wide).sum(axis=0)

        if n_ch > 1 and identical:
            identical = bool((block == block[:, :1]).all())

        raw = np.ascontiguousarray(block, dtype="<i2").view(np.uint8).ravel()
        counts += np.bincount(raw, minlength=256)

        # A run starts at byte 0 and wherever a byte differs from the last one
        runs += int(np.count_nonzero(raw[1:] != raw[:-1]))
        if last_byte is None or raw[0] != last_byte:
            runs += 1
        last_byte = raw[-1]

    rms = np.sqrt(sum_sq / max(frames, 1))
    return PatternProfile(
        frames=frames,
        peak=[int(p) for p in peak],
        rms=[float(r) for r in rms],
        stereo_identical=identical,
        byte_counts={int(v): int(c) for v, c in enumerate(counts) if c},
        byte_runs=runs,
    )


def classify(profile: PatternProfile) -> Pattern | None:
    """Best guess of which pattern produced `profile`, or None."""
    values = set(profile.byte_counts)
    if values and values <= {DARK_BYTE, LIGHT_BYTE}:
        if profile.stereo_identical and profile.byte_runs <= BAND_RUN_LIMIT:
            return Pattern.BANDS
        return Pattern.PIE
    if profile.stereo_identical and max(profile.peak, default=0) >= TONE_MIN_PEAK:
        return Pattern.PITCH
    return None
