# =============================================================================
# constants.py — SMM Medium Constants
# =============================================================================
#
# Every value in this file is a physical or format constant of the target
# medium (Red Book audio CD-R / CD-RW, burned track-at-once).  They are NOT
# user settings: the burner expects exactly this PCM layout, and the disc
# geometry values are what the pie pattern was calibrated against.
#
# Pattern generator ARGUMENTS (tone frequency, band count, slice width) live
# at the bottom of the file and may be overridden from the CLI.

from enum import Enum


# -----------------------------------------------------------------------------
# PCM FORMAT  (Red Book audio)
# -----------------------------------------------------------------------------

SAMPLE_RATE     = 44_100        # Hz, the only rate an audio CD accepts
SAMPLES         = 1_400         # seconds of audio; also the tone repeat count
CHANNELS        = 2             # stereo
BITS_PER_SAMPLE = 16            # signed little-endian PCM

BLOCK_ALIGN = CHANNELS * BITS_PER_SAMPLE // 8   # = 4 bytes per stereo pair
BYTE_RATE   = SAMPLE_RATE * BLOCK_ALIGN          # = 176,400 bytes/s

# Payload size: one stereo pair per sample, every second, for SAMPLES seconds.
DATA_LENGTH = SAMPLE_RATE * SAMPLES * 4          # = 246,960,000 bytes


# -----------------------------------------------------------------------------
# WAV CONTAINER  (canonical 44-byte RIFF header)
# -----------------------------------------------------------------------------

WAV_HEADER_SIZE = 44
RIFF_LENGTH     = WAV_HEADER_SIZE + DATA_LENGTH - 8   # file size minus "RIFF"+size
FMT_LENGTH      = 16            # size of a plain PCM fmt chunk body
AUDIO_FORMAT_PCM = 1

# Whole file: header + payload.  Checked before anything is written out.
TOTAL_LENGTH = WAV_HEADER_SIZE + DATA_LENGTH          # = 246,960,044 bytes


# -----------------------------------------------------------------------------
# DISC GEOMETRY  (pie pattern)
# -----------------------------------------------------------------------------
# The burner writes the payload on a spiral.  One revolution at radius r mm
# holds 2*pi*r / BYTE_LENGTH payload bytes.

START_RADIUS = 25.0             # mm, start of the program area
TRACK_PITCH  = 0.00148          # mm, distance between adjacent revolutions
LINEAR_SPEED = 1300.0           # calibration value, not a measured speed
BYTE_LENGTH  = LINEAR_SPEED / BYTE_RATE   # mm of track per payload byte

# Disc area ends around here; a full-length burn stays well inside it.
MAX_RADIUS = 58.0               # mm


# -----------------------------------------------------------------------------
# PATTERN LEVELS
# -----------------------------------------------------------------------------
# Two byte values that burn with visibly different reflectivity.  The 16-bit
# band levels are the same bytes doubled up so every byte of a band matches.

DARK_BYTE  = 0x40
LIGHT_BYTE = 0x45

DARK_SAMPLE  = 0x4040
LIGHT_SAMPLE = 0x4545

TONE_AMPLITUDE = 0x7FFF         # full-scale int16


# -----------------------------------------------------------------------------
# PATTERNS
# -----------------------------------------------------------------------------

class Pattern(str, Enum):
    """Pattern names accepted on the command line."""
    PITCH = "pitch"
    BANDS = "bands"
    PIE   = "pie"


# Default generator argument per pattern
PITCH_FREQUENCY = 440.0         # Hz, calibration tone
BAND_COUNT      = 8             # concentric bands; divides SAMPLE_RATE*SAMPLES
PIE_WIDTH       = 0.25          # fraction of a revolution per slice (4 slices)

PATTERN_DEFAULTS = {
    Pattern.PITCH: PITCH_FREQUENCY,
    Pattern.BANDS: BAND_COUNT,
    Pattern.PIE:   PIE_WIDTH,
}
