# =============================================================================
# SGM — Signal Generation Module
# Subfolder of MEE (Micro-Engraving Engine)
# =============================================================================
#
# Builds the engraving WAV byte-for-byte in one in-memory buffer.
#
# Modules:
#   byte_encoder.py    — little-endian int16 / int32 writers
#   wav_header.py      — canonical 44-byte RIFF/WAVE header
#   pattern_builder.py — pitch / bands / pie payload generators
#   engrave.py         — orchestrator: header → pattern → length checks → write
#
# Constants live in MEE/SMM/constants.py
# Verification tools live in MEE/SVM/
# =============================================================================
