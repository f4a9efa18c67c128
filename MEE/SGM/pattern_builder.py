# =============================================================================
# pattern_builder.py — Payload generators (pitch / bands / pie)
# =============================================================================
#
# Each generator APPENDS to the caller's output buffer, which already holds
# the 44-byte WAV header.  Nothing is ever rewritten or truncated.
#
#   pitch(buf, frequency) — sine tone, identical L/R, 16-bit
#   bands(buf, count)     — `count` concentric rings of two alternating levels
#   pie(buf, width)       — angular slices following the spiral geometry
#
# LENGTH GUARANTEE:
#   pitch and bands emit exactly SAMPLE_RATE * SAMPLES stereo pairs when their
#   argument divides evenly (bands), i.e. DATA_LENGTH bytes.
#   pie emits single bytes until the buffer is exactly TOTAL_LENGTH long.
#
# Only one second of tone and one pair per band are computed sample-by-sample;
# the rest is repetition of those exact bytes.  That is what the per-sample
# loops would produce anyway, since the tone phase restarts every second and a
# band is one constant value.

import math

from MEE.SMM.constants import (
    SAMPLE_RATE, SAMPLES, TOTAL_LENGTH,
    DARK_BYTE, LIGHT_BYTE, DARK_SAMPLE, LIGHT_SAMPLE,
    TONE_AMPLITUDE,
    START_RADIUS, TRACK_PITCH, BYTE_LENGTH,
    PITCH_FREQUENCY, BAND_COUNT, PIE_WIDTH,
)
from .byte_encoder import write_int16, stereo_pair


# ── pitch ────────────────────────────────────────────────────────────────────

def tone_second(frequency: float) -> bytes:
    """
    One second of the test tone as raw stereo PCM (SAMPLE_RATE pairs).

    The amplitude is truncated toward zero, not rounded.
    """
    block = bytearray()
    for j in range(SAMPLE_RATE):
        s = j / SAMPLE_RATE * 2 * math.pi
        t = int(math.sin(s * frequency) * TONE_AMPLITUDE)
        write_int16(block, t)   # left
        write_int16(block, t)   # right
    return bytes(block)


def pitch(buf: bytearray, frequency: float = PITCH_FREQUENCY,
          seconds: int = SAMPLES) -> None:
    """
    Append a fixed-pitch tone.  Used for testing the burn/playback chain.

    The phase starts again at zero every second, so the output is the same
    one-second waveform repeated `seconds` times rather than one continuous
    tone.  Non-integer frequencies therefore click once per second.
    """
    block = tone_second(frequency)
    for _ in range(seconds):
        buf += block


# ── bands ────────────────────────────────────────────────────────────────────

def bands(buf: bytearray, count: int = BAND_COUNT,
          seconds: int = SAMPLES) -> None:
    """
    Append `count` concentric bands.

    Each band is SAMPLE_RATE * seconds // count stereo pairs of DARK_SAMPLE
    (even bands) or LIGHT_SAMPLE (odd bands).  When `count` does not divide
    the sample count the remainder is simply not written.  A band is at
    least one stereo pair.
    """
    if count < 1:
        raise ValueError(f"band count must be >= 1, got {count}")
    if count > SAMPLE_RATE * seconds:
        raise ValueError(
            f"band count {count} exceeds the {SAMPLE_RATE * seconds} "
            f"stereo pairs available"
        )

    per_band = SAMPLE_RATE * seconds // count
    dark  = stereo_pair(DARK_SAMPLE)
    light = stereo_pair(LIGHT_SAMPLE)

    for i in range(count):
        buf += (dark if i % 2 == 0 else light) * per_band


# ── pie ──────────────────────────────────────────────────────────────────────

def slice_count(width: float) -> int:
    """
    Number of slices per revolution for a slice `width` (fraction of 2*pi).

    Between 2 and the bytes per revolution at START_RADIUS, so every slice
    on the innermost turn holds at least one byte.
    """
    if width <= 0:
        raise ValueError(f"pie width must be > 0, got {width}")
    slices = round(1 / width)
    if slices < 2:
        raise ValueError(
            f"pie width {width} gives {slices} slice(s) per revolution; "
            f"need at least 2"
        )
    most = int(SpiralTrack().bytes_per_revolution())
    if slices > most:
        raise ValueError(
            f"pie width {width} gives {slices} slices per revolution; "
            f"the first revolution only holds {most} bytes"
        )
    return slices


class SpiralTrack:
    """
    Position of the write head on the disc spiral.

    The radius only ever grows, by TRACK_PITCH per completed revolution.

    Usage:
        track = SpiralTrack()
        n = track.bytes_per_revolution()   # ~21,315 at 25 mm
        track.advance()
    """

    def __init__(self, radius: float = START_RADIUS) -> None:
        self.radius = radius
        self.revolutions = 0

    def bytes_per_revolution(self) -> float:
        """Payload bytes that fit on one turn at the current radius."""
        return 2 * math.pi * self.radius / BYTE_LENGTH

    def advance(self) -> None:
        self.radius += TRACK_PITCH
        self.revolutions += 1

    def slice_runs(self, slices: int) -> list[tuple[int, int]]:
        """
        Byte runs for one revolution: [(byte_value, count), ...].

        Slice q covers byte indices int(circ/slices*(q-1)) up to
        int(circ/slices*q) - 1.  Both bounds truncate toward zero, and slice 0
        starts at a negative index, so it is as long as slice 1.
        """
        circ = self.bytes_per_revolution()
        runs = []
        for q in range(slices):
            start = int(circ / slices * (q - 1))
            end   = int(circ / slices * q)
            value = DARK_BYTE if q % 2 == 0 else LIGHT_BYTE
            runs.append((value, max(end - start, 0)))
        return runs


def pie_revolutions(width: float = PIE_WIDTH):
    """
    Endless generator of (radius, runs), one item per revolution, starting
    at START_RADIUS.
    """
    slices = slice_count(width)
    track = SpiralTrack()
    while True:
        yield track.radius, track.slice_runs(slices)
        track.advance()


def pie(buf: bytearray, width: float = PIE_WIDTH,
        limit: int = TOTAL_LENGTH) -> float:
    """
    Append a pie until `buf` is exactly `limit` bytes long.

    Writing stops mid-slice as soon as the limit is reached.  Returns the
    radius (mm) of the revolution the last byte landed on.
    """
    if len(buf) >= limit:
        raise ValueError(
            f"buffer already holds {len(buf)} bytes, limit is {limit}"
        )

    for radius, runs in pie_revolutions(width):
        for value, count in runs:
            remaining = limit - len(buf)
            if count >= remaining:
                buf += bytes((value,)) * remaining
                return radius
            buf += bytes((value,)) * count
