"""
Pattern Generator Tests

Short-buffer structure tests plus full-length properties of every pattern.
Full-length payloads are ~247 MB, so each is generated once per module and
inspected through numpy views.
"""

import math

import numpy as np
import pytest

from MEE.SMM.constants import (
    SAMPLE_RATE, SAMPLES, WAV_HEADER_SIZE, DATA_LENGTH, TOTAL_LENGTH,
    DARK_BYTE, LIGHT_BYTE, START_RADIUS, TRACK_PITCH, MAX_RADIUS,
)
from MEE.SGM.wav_header import wav_header_bytes
from MEE.SGM.pattern_builder import (
    tone_second, pitch, bands, pie, pie_revolutions, slice_count, SpiralTrack,
)

SECOND = SAMPLE_RATE * 4   # bytes of stereo PCM per second


# ── pitch ────────────────────────────────────────────────────────────────────

class TestToneSecond:
    """One second of the calibration tone."""

    def test_length(self):
        assert len(tone_second(440.0)) == SECOND

    def test_amplitude_truncates_toward_zero(self):
        samples = np.frombuffer(tone_second(440.0), dtype="<i2")[::2]
        for j in (0, 1, 7, 25, 60, 113, 44_099):
            s = j / SAMPLE_RATE * 2 * math.pi
            assert samples[j] == int(math.sin(s * 440.0) * 0x7FFF)

    def test_left_equals_right(self):
        pairs = np.frombuffer(tone_second(1000.0), dtype="<i2").reshape(-1, 2)
        assert (pairs[:, 0] == pairs[:, 1]).all()

    def test_starts_at_zero(self):
        assert tone_second(440.0)[:4] == b"\x00\x00\x00\x00"

    def test_peak_below_full_scale(self):
        samples = np.frombuffer(tone_second(440.0), dtype="<i2")
        assert samples.max() <= 0x7FFF
        assert samples.min() >= -0x7FFF
        assert samples.max() > 32_000


class TestPitch:

    def test_repeats_same_second(self):
        buf = bytearray()
        pitch(buf, 440.0, seconds=3)
        assert len(buf) == 3 * SECOND
        assert buf[:SECOND] == buf[SECOND:2 * SECOND] == buf[2 * SECOND:]

    def test_appends_to_existing_buffer(self):
        buf = bytearray(wav_header_bytes())
        pitch(buf, 440.0, seconds=1)
        assert buf[:WAV_HEADER_SIZE] == wav_header_bytes()
        assert len(buf) == WAV_HEADER_SIZE + SECOND


# ── bands ────────────────────────────────────────────────────────────────────

class TestBands:

    def test_two_second_layout(self):
        buf = bytearray()
        bands(buf, 4, seconds=2)
        quarter = len(buf) // 4
        assert len(buf) == 2 * SECOND
        assert set(buf[:quarter]) == {DARK_BYTE}
        assert set(buf[quarter:2 * quarter]) == {LIGHT_BYTE}
        assert set(buf[2 * quarter:3 * quarter]) == {DARK_BYTE}
        assert set(buf[3 * quarter:]) == {LIGHT_BYTE}

    def test_remainder_is_dropped(self):
        """11 does not divide 44100; the leftover pairs are not written."""
        buf = bytearray()
        bands(buf, 11, seconds=1)
        assert len(buf) == (SAMPLE_RATE // 11) * 11 * 4
        assert len(buf) < SECOND

    def test_single_band(self):
        buf = bytearray()
        bands(buf, 1, seconds=1)
        assert set(buf) == {DARK_BYTE}

    def test_rejects_zero_bands(self):
        with pytest.raises(ValueError):
            bands(bytearray(), 0)

    def test_one_pair_per_band(self):
        buf = bytearray()
        bands(buf, SAMPLE_RATE, seconds=1)
        assert len(buf) == SECOND

    @pytest.mark.parametrize("count", [SAMPLE_RATE + 1, 10_000_000_000])
    def test_rejects_more_bands_than_pairs(self, count):
        buf = bytearray()
        with pytest.raises(ValueError):
            bands(buf, count, seconds=1)
        assert len(buf) == 0


# ── pie ──────────────────────────────────────────────────────────────────────

class TestSliceCount:

    def test_quarter_is_four(self):
        assert slice_count(0.25) == 4

    def test_sixth(self):
        assert slice_count(1 / 6) == 6

    def test_finest_width_fits_first_revolution(self):
        most = int(SpiralTrack().bytes_per_revolution())
        assert slice_count(1 / most) == most
        with pytest.raises(ValueError):
            slice_count(1 / (most + 1))

    @pytest.mark.parametrize("width", [0.0, -0.25, 1.0, 0.9, 1e-5, 1e-7])
    def test_rejects_widths_without_two_slices(self, width):
        with pytest.raises(ValueError):
            slice_count(width)


class TestSpiralTrack:

    def test_circumference_at_start(self):
        track = SpiralTrack()
        circ = track.bytes_per_revolution()
        assert circ == pytest.approx(2 * math.pi * 25.0 / (1300.0 / 176400))
        assert 21_300 < circ < 21_330

    def test_quadrant_bounds(self):
        track = SpiralTrack()
        circ = track.bytes_per_revolution()
        runs = track.slice_runs(4)
        # Slice 0 spans int(-circ/4) .. -1, the rest follow contiguously
        assert runs == [
            (DARK_BYTE,  0 - int(circ / 4 * -1)),
            (LIGHT_BYTE, int(circ / 4)),
            (DARK_BYTE,  int(circ / 2) - int(circ / 4)),
            (LIGHT_BYTE, int(circ / 4 * 3) - int(circ / 2)),
        ]
        assert runs[0][1] == runs[1][1]

    def test_advance(self):
        track = SpiralTrack()
        track.advance()
        track.advance()
        assert track.revolutions == 2
        assert track.radius == START_RADIUS + TRACK_PITCH + TRACK_PITCH


class TestPieRevolutions:

    def test_radius_strictly_increasing(self):
        gen = pie_revolutions(0.25)
        radii = [next(gen)[0] for _ in range(200)]
        assert radii[0] == START_RADIUS
        assert all(b > a for a, b in zip(radii, radii[1:]))

    def test_revolutions_grow(self):
        gen = pie_revolutions(0.25)
        first = sum(n for _, n in next(gen)[1])
        for _ in range(999):
            _, runs = next(gen)
        assert sum(n for _, n in runs) > first

    def test_six_slices_alternate(self):
        _, runs = next(pie_revolutions(1 / 6))
        assert [v for v, _ in runs] == [DARK_BYTE, LIGHT_BYTE] * 3


class TestPieShort:

    def test_stops_exactly_at_limit(self):
        buf = bytearray(wav_header_bytes())
        limit = WAV_HEADER_SIZE + 2 * SECOND
        radius = pie(buf, 0.25, limit=limit)
        assert len(buf) == limit
        assert radius > START_RADIUS

    def test_stops_mid_slice(self):
        buf = bytearray()
        pie(buf, 0.25, limit=100)
        assert bytes(buf) == bytes([DARK_BYTE]) * 100

    def test_first_revolution_layout(self):
        track = SpiralTrack()
        runs = track.slice_runs(4)
        n = sum(c for _, c in runs)
        buf = bytearray()
        pie(buf, 0.25, limit=n)
        pos = 0
        for value, count in runs:
            assert set(buf[pos:pos + count]) == {value}
            pos += count

    def test_rejects_full_buffer(self):
        with pytest.raises(ValueError):
            pie(bytearray(10), 0.25, limit=10)


# ── full length ──────────────────────────────────────────────────────────────

@pytest.fixture(scope="module")
def tone_payload():
    buf = bytearray(wav_header_bytes())
    pitch(buf, 440.0)
    yield np.frombuffer(buf, dtype="<i2", offset=WAV_HEADER_SIZE)
    del buf


@pytest.fixture(scope="module")
def band_payload():
    buf = bytearray(wav_header_bytes())
    bands(buf, 8)
    yield np.frombuffer(buf, dtype=np.uint8, offset=WAV_HEADER_SIZE)
    del buf


@pytest.fixture(scope="module")
def pie_result():
    buf = bytearray(wav_header_bytes())
    radius = pie(buf, 0.25)
    yield np.frombuffer(buf, dtype=np.uint8, offset=WAV_HEADER_SIZE), radius
    del buf


class TestFullLength:

    def test_tone_length(self, tone_payload):
        assert tone_payload.nbytes == DATA_LENGTH

    def test_tone_left_equals_right(self, tone_payload):
        pairs = tone_payload.reshape(-1, 2)
        assert pairs.shape[0] == SAMPLE_RATE * SAMPLES
        assert (pairs[:, 0] == pairs[:, 1]).all()

    def test_tone_seconds_identical(self, tone_payload):
        seconds = tone_payload.reshape(SAMPLES, SAMPLE_RATE * 2)
        assert (seconds == seconds[0]).all()

    def test_band_blocks(self, band_payload):
        assert band_payload.nbytes == DATA_LENGTH
        blocks = band_payload.reshape(8, -1)
        assert blocks.shape[1] == SAMPLE_RATE * SAMPLES // 8 * 4
        for i, block in enumerate(blocks):
            want = DARK_BYTE if i % 2 == 0 else LIGHT_BYTE
            assert (block == want).all(), f"band {i}"

    def test_pie_length(self, pie_result):
        payload, _ = pie_result
        assert payload.nbytes == DATA_LENGTH
        assert payload.nbytes + WAV_HEADER_SIZE == TOTAL_LENGTH

    def test_pie_two_levels(self, pie_result):
        payload, _ = pie_result
        assert set(np.unique(payload).tolist()) == {DARK_BYTE, LIGHT_BYTE}

    def test_pie_radius(self, pie_result):
        _, radius = pie_result
        assert START_RADIUS < radius < MAX_RADIUS

    def test_pie_starts_with_dark_quarter(self, pie_result):
        payload, _ = pie_result
        quarter = SpiralTrack().slice_runs(4)[0][1]
        assert (payload[:quarter] == DARK_BYTE).all()
        assert payload[quarter] == LIGHT_BYTE
