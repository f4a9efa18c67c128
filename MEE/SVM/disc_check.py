#!/usr/bin/env python3
# =============================================================================
# disc_check.py — Pre-burn verification of an engraving WAV
# =============================================================================
#
# Reads a generated WAV and tells you whether it is safe to burn: the header
# must match the fixed format byte-for-byte, the file must be exactly the
# expected length, and the payload should look like the pattern you meant.
#
# Usage:
#   python -m MEE.SVM.disc_check out/a.wav
#   python -m MEE.SVM.disc_check out/a.wav --expect pie
#
# Output sections:
#   [1] File info       — soundfile's view: rate, channels, frames, subtype
#   [2] Header check    — every header field vs. SMM/constants.py
#   [3] Payload profile — levels, L/R symmetry, byte histogram, byte runs
#   [4] VERDICT         — PASS / FAIL with reasons
# =============================================================================

from __future__ import annotations
import argparse
import os
import sys

import soundfile as sf

from MEE.SMM.constants import Pattern, TOTAL_LENGTH
from MEE.SVM.wav_inspect import (
    read_wav_header, check_header, pattern_profile, classify,
)

DIVIDER = "=" * 68


def run_check(wav_path: str, expect: Pattern | None = None) -> bool:
    """
    Run every check on one WAV file and print the report.
    Returns True if the file is fit to burn, False otherwise.
    """
    reasons: list[str] = []

    print(f"\n{DIVIDER}")
    print(f"  Micro-Engraving Disc Check")
    print(DIVIDER)

    if not os.path.exists(wav_path):
        print(f"  [!!] File not found: {wav_path}")
        return False

    # -----------------------------------------------------------------------
    # [1] File info
    # -----------------------------------------------------------------------
    file_size = os.path.getsize(wav_path)
    try:
        info = sf.info(wav_path)
    except RuntimeError as exc:     # soundfile.LibsndfileError
        print(f"  [!!] Not a readable audio file: {exc}")
        return False
    print(f"  File     : {os.path.basename(wav_path)}")
    print(f"  Size     : {file_size:,} bytes  (expected {TOTAL_LENGTH:,})")
    print(f"  Rate     : {info.samplerate} Hz")
    print(f"  Channels : {info.channels}")
    print(f"  Duration : {info.frames / info.samplerate:.2f} s  ({info.frames:,} frames)")
    print(f"  Format   : {info.subtype}")

    # -----------------------------------------------------------------------
    # [2] Header
    # -----------------------------------------------------------------------
    print(f"\n  -- Header Check --")
    try:
        header = read_wav_header(wav_path)
    except ValueError as exc:
        print(f"  [FAIL] {exc}")
        reasons.append(f"header: {exc}")
        header = None

    if header is not None:
        problems = check_header(header, file_size)
        if problems:
            for p in problems:
                print(f"  [FAIL] {p}")
            reasons.extend(f"header: {p}" for p in problems)
        else:
            print(f"  [PASS] 44-byte PCM header, {header.data_length:,} data bytes")

    # -----------------------------------------------------------------------
    # [3] Payload
    # -----------------------------------------------------------------------
    print(f"\n  -- Payload Profile --")
    profile = pattern_profile(wav_path)
    for ci, (peak, rms) in enumerate(zip(profile.peak, profile.rms)):
        print(f"  Ch{ci}: peak={peak:>6d}  rms={rms:>9.1f}")
    print(f"  L == R on every frame : {'yes' if profile.stereo_identical else 'no'}")
    print(f"  Distinct byte values  : {len(profile.byte_counts)}")
    for value, count in sorted(profile.byte_counts.items(),
                               key=lambda kv: -kv[1])[:4]:
        print(f"    0x{value:02X}: {count:>12,}")
    print(f"  Byte runs             : {profile.byte_runs:,}")

    guess = classify(profile)
    print(f"  Looks like            : {guess.value if guess else 'unknown'}")

    if expect is not None and guess is not expect:
        reasons.append(
            f"payload looks like {guess.value if guess else 'no known pattern'}, "
            f"expected {expect.value}"
        )

    # -----------------------------------------------------------------------
    # [4] Verdict
    # -----------------------------------------------------------------------
    print(f"\n{DIVIDER}")
    if not reasons:
        print(f"  VERDICT: PASS — ready to burn")
    else:
        print(f"  VERDICT: FAIL — do not burn")
        for r in reasons:
            print(f"    - {r}")
    print(f"{DIVIDER}\n")

    return not reasons


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------
def main(argv=None) -> None:
    parser = argparse.ArgumentParser(
        description="Verify an engraving WAV before burning it",
    )
    parser.add_argument("wav", help="Path to the generated WAV file")
    parser.add_argument(
        "--expect", choices=[p.value for p in Pattern], default=None,
        help="Fail unless the payload looks like this pattern",
    )
    args = parser.parse_args(argv)

    ok = run_check(
        wav_path=args.wav,
        expect=Pattern(args.expect) if args.expect else None,
    )
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
