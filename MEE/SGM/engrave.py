#!/usr/bin/env python3
# =============================================================================
# engrave.py — Pattern WAV orchestrator + CLI
# =============================================================================
#
# Usage:
#   python -m MEE.SGM.engrave pie > out/a.wav
#   python -m MEE.SGM.engrave bands --output out/a.wav
#   python -m MEE.SGM.engrave pitch --frequency 1000 -o out/tone.wav
#
# Pipeline:
#   1. header  → buffer, must be exactly WAV_HEADER_SIZE bytes
#   2. pattern → appended to the same buffer
#   3. buffer must be exactly TOTAL_LENGTH bytes
#   4. one bulk write to stdout / file
#
# Any failed check aborts with exit status 1 and NOTHING written.  stdout is
# the WAV itself, so every status line goes to stderr.
# =============================================================================

import argparse
import os
import sys
import tempfile
from pathlib import Path

from MEE.SMM.constants import (
    WAV_HEADER_SIZE, TOTAL_LENGTH,
    Pattern, PATTERN_DEFAULTS,
)
from .wav_header import wav_header
from .pattern_builder import pitch, bands, pie


class EngravingError(RuntimeError):
    """A length invariant failed.  Always a bug, never bad input."""

    def __init__(self, message: str, expected: int, actual: int) -> None:
        super().__init__(f"{message}. Expecting {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


def log(message: str) -> None:
    print(message, file=sys.stderr)


def build(pattern, argument=None) -> bytearray:
    """
    Build the complete WAV for `pattern` in memory.

    Args:
        pattern:  Pattern member or its name ("pitch" | "bands" | "pie").
        argument: Generator argument: tone frequency (pitch), band count
                  (bands) or slice width (pie).  None = PATTERN_DEFAULTS.

    Returns:
        bytearray of exactly TOTAL_LENGTH bytes.

    Raises:
        ValueError:     unknown pattern name, or an argument the generator
                        rejects.
        EngravingError: header or total length is wrong.
    """
    pattern = Pattern(pattern)
    if argument is None:
        argument = PATTERN_DEFAULTS[pattern]

    buf = bytearray()

    wav_header(buf)
    if len(buf) != WAV_HEADER_SIZE:
        raise EngravingError("incorrect header length", WAV_HEADER_SIZE, len(buf))

    if pattern is Pattern.PITCH:
        pitch(buf, float(argument))
    elif pattern is Pattern.BANDS:
        bands(buf, int(argument))
    else:
        radius = pie(buf, float(argument))
        log(f"[INFO] pie ends at radius {radius:.3f} mm")

    if len(buf) != TOTAL_LENGTH:
        raise EngravingError("incorrect total bytes", TOTAL_LENGTH, len(buf))

    return buf


def write_output(buf: bytearray, output) -> None:
    """
    Write the whole buffer to `output` (a path) or to binary stdout.

    A file is written to a temporary sibling first and renamed into place,
    so `output` is either the complete WAV or untouched.

    Raises:
        OSError: the file could not be created or written.
    """
    if output is None:
        sys.stdout.buffer.write(buf)
        sys.stdout.buffer.flush()
        return
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".part",
                               dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(buf)
        os.chmod(tmp, 0o644)
        os.replace(tmp, path)
    except OSError:
        Path(tmp).unlink(missing_ok=True)
        raise


def burn_hint(path: Path) -> str:
    """Shell command that burns `path` as a single audio track."""
    if sys.platform == "darwin":
        return (
            f"drutil burn -noverify -nofs -audio -notest -noappendable "
            f"-erase -eject {path.parent}"
        )
    return f"cdrecord -v -dao -audio {path}"


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------
def main(argv=None) -> None:
    parser = argparse.ArgumentParser(
        description="Generate a WAV that paints a pattern on a burned CD-R",
    )
    parser.add_argument(
        "pattern",
        help="Pattern to engrave: " + " | ".join(p.value for p in Pattern),
    )
    parser.add_argument(
        "-o", "--output", default=None,
        help="Write the WAV to this file instead of stdout",
    )
    parser.add_argument(
        "--frequency", type=float, default=None,
        help="pitch: tone frequency in Hz, default 440",
    )
    parser.add_argument(
        "--bands", type=int, default=None, dest="band_count",
        help="bands: number of concentric bands, default 8",
    )
    parser.add_argument(
        "--width", type=float, default=None,
        help="pie: slice width as a fraction of a revolution, default 0.25",
    )
    args = parser.parse_args(argv)

    log(f"creating pattern: {args.pattern}")

    try:
        pattern = Pattern(args.pattern)
    except ValueError:
        log(f"[!!] unknown pattern: {args.pattern!r} "
            f"(expected one of {', '.join(p.value for p in Pattern)})")
        sys.exit(1)

    argument = {
        Pattern.PITCH: args.frequency,
        Pattern.BANDS: args.band_count,
        Pattern.PIE:   args.width,
    }[pattern]

    try:
        buf = build(pattern, argument)
    except (ValueError, EngravingError) as exc:
        log(f"[!!] {exc}")
        sys.exit(1)

    try:
        write_output(buf, args.output)
    except OSError as exc:
        log(f"[!!] cannot write output: {exc}")
        sys.exit(1)

    if args.output is None:
        log(f"[PASS] wrote {len(buf):,} bytes to stdout")
    else:
        path = Path(args.output)
        log(f"[PASS] wrote {len(buf):,} bytes to {path}")
        log(f"[INFO] burn with: {burn_hint(path)}")


if __name__ == "__main__":
    main()
