#!/usr/bin/env python3
# =============================================================================
# validate.py — SGM Self-Validation Suite
# =============================================================================
#
# Run directly:  python -m MEE.SVM.validate
#
# Tests:
#   1. Constants integrity — format math, header/payload sizes
#   2. Byte encoder        — little-endian layout, masking
#   3. WAV header          — 44 bytes, every field at its offset
#   4. Generators          — pitch / bands / pie structure on short buffers
#   5. Full build          — every pattern at full length (~247 MB each)
# =============================================================================

import sys
import itertools

from MEE.SMM.constants import (
    SAMPLE_RATE, SAMPLES, CHANNELS, BITS_PER_SAMPLE,
    BYTE_RATE, BLOCK_ALIGN,
    WAV_HEADER_SIZE, DATA_LENGTH, RIFF_LENGTH, TOTAL_LENGTH,
    DARK_BYTE, LIGHT_BYTE,
    START_RADIUS, MAX_RADIUS,
    Pattern,
)
from MEE.SGM.byte_encoder import write_int16, write_int32
from MEE.SGM.wav_header import wav_header_bytes
from MEE.SGM.pattern_builder import pitch, bands, pie, SpiralTrack
from MEE.SGM.engrave import build
from MEE.SVM.wav_inspect import parse_wav_header, check_header

PASS = "[PASS]"
FAIL = "[FAIL]"
INFO = "[INFO]"

failures = 0

def check(label: str, condition: bool, detail: str = "") -> bool:
    global failures
    if condition:
        print(f"  {PASS} {label}")
    else:
        print(f"  {FAIL} {label}{(' -- ' + detail) if detail else ''}")
        failures += 1
    return condition


def section(title: str) -> None:
    print("\n" + "="*60)
    print(title)
    print("="*60)


# =============================================================================
# TEST 1 — Constants Integrity
# =============================================================================
section("TEST 1 — Constants Integrity")

check("SAMPLE_RATE = 44100",          SAMPLE_RATE == 44_100)
check("SAMPLES = 1400",               SAMPLES == 1_400)
check("BYTE_RATE = 176400",           BYTE_RATE == 176_400, f"got {BYTE_RATE}")
check("BLOCK_ALIGN = 4",              BLOCK_ALIGN == 4, f"got {BLOCK_ALIGN}")
check("BLOCK_ALIGN = CH * BPS / 8",   BLOCK_ALIGN == CHANNELS * BITS_PER_SAMPLE // 8)
check("DATA_LENGTH = 246,960,000",    DATA_LENGTH == 246_960_000, f"got {DATA_LENGTH}")
check("RIFF_LENGTH = 44 + data - 8",  RIFF_LENGTH == 44 + DATA_LENGTH - 8)
check("RIFF_LENGTH fits 32 bits",     RIFF_LENGTH < 2**32)
check("TOTAL_LENGTH = header + data", TOTAL_LENGTH == WAV_HEADER_SIZE + DATA_LENGTH)
check("8 bands divide the sample count", (SAMPLE_RATE * SAMPLES) % 8 == 0)


# =============================================================================
# TEST 2 — Byte Encoder
# =============================================================================
section("TEST 2 — Byte Encoder")

b = bytearray()
write_int16(b, 0x1234)
check("int16 0x1234 -> 34 12",        bytes(b) == b"\x34\x12", b.hex())

b = bytearray()
write_int32(b, 0x12345678)
check("int32 0x12345678 -> 78 56 34 12", bytes(b) == b"\x78\x56\x34\x12", b.hex())

b = bytearray()
write_int16(b, -1)
check("int16 -1 masks to ff ff",      bytes(b) == b"\xff\xff", b.hex())

b = bytearray()
write_int16(b, 0x12345)
check("int16 keeps only low 16 bits", bytes(b) == b"\x45\x23", b.hex())


# =============================================================================
# TEST 3 — WAV Header
# =============================================================================
section("TEST 3 — WAV Header")

header = wav_header_bytes()
check("Header is 44 bytes",           len(header) == WAV_HEADER_SIZE, f"got {len(header)}")
check("Starts with RIFF....WAVEfmt ", header[:4] == b"RIFF" and header[8:16] == b"WAVEfmt ")
check("data tag at offset 36",        header[36:40] == b"data")
info = parse_wav_header(header)
problems = check_header(info)
check("Every field matches the fixed format", not problems, "; ".join(problems))


# =============================================================================
# TEST 4 — Generators (2 s of payload)
# =============================================================================
section("TEST 4 — Generators")

SHORT = 2

buf = bytearray()
pitch(buf, 440.0, seconds=SHORT)
second = SAMPLE_RATE * 4
check("pitch: length = 2 s of stereo pairs", len(buf) == SHORT * second, f"got {len(buf)}")
check("pitch: L == R on every pair",
      all(buf[i:i+2] == buf[i+2:i+4] for i in range(0, second, 4)))
check("pitch: second 2 repeats second 1", buf[:second] == buf[second:])
check("pitch: starts at zero phase",  buf[:4] == b"\x00\x00\x00\x00")

buf = bytearray()
bands(buf, 8, seconds=SHORT)
band_len = SAMPLE_RATE * SHORT // 8 * 4
check("bands: length = 2 s of stereo pairs", len(buf) == SHORT * second)
check("bands: 8 runs alternating 0x40 / 0x45",
      [(k, len(list(g))) for k, g in itertools.groupby(buf)]
      == [(DARK_BYTE if i % 2 == 0 else LIGHT_BYTE, band_len) for i in range(8)])

buf = bytearray(header)
limit = WAV_HEADER_SIZE + SHORT * second
radius = pie(buf, 0.25, limit=limit)
payload = buf[WAV_HEADER_SIZE:]
check("pie: stops exactly at the limit", len(buf) == limit, f"got {len(buf)}")
check("pie: only 0x40 / 0x45 bytes",  set(payload) <= {DARK_BYTE, LIGHT_BYTE})
check("pie: radius advanced past start", radius > START_RADIUS, f"radius={radius}")

track = SpiralTrack()
runs = track.slice_runs(4)
circ = track.bytes_per_revolution()
print(f"  {INFO} bytes/revolution at {START_RADIUS} mm: {circ:.1f}")
print(f"  {INFO} slice runs: {runs}")
check("pie: slice 0 as long as slice 1 (negative start)", runs[0][1] == runs[1][1])
check("pie: one revolution ~ circumference", abs(sum(n for _, n in runs) - circ) < 4)


# =============================================================================
# TEST 5 — Full Build
# =============================================================================
section("TEST 5 — Full Build")

for pattern in Pattern:
    out = build(pattern)
    check(f"{pattern.value}: total = {TOTAL_LENGTH:,} bytes",
          len(out) == TOTAL_LENGTH, f"got {len(out):,}")
    check(f"{pattern.value}: header unchanged", out[:WAV_HEADER_SIZE] == header)
    del out

radius = pie(bytearray(header))
print(f"  {INFO} full pie ends at radius {radius:.3f} mm")
check("pie: full burn stays inside the disc", radius < MAX_RADIUS, f"radius={radius}")


# =============================================================================
# Summary
# =============================================================================
print("\n" + "="*60)
if failures == 0:
    print(f"  ALL TESTS PASSED")
else:
    print(f"  {failures} TEST(S) FAILED")
print("="*60 + "\n")
sys.exit(0 if failures == 0 else 1)
