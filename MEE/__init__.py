# =============================================================================
# Micro-Engraving Engine (MEE)
# =============================================================================
#
# Burns useless data onto a CD-R with the sole purpose of painting patterns.
# "Micro" because the pits on a CD are engraved at a ~1.5 µm resolution: if
# the bytes written along the spiral alternate between two values at the
# right places, the burned dye changes reflectivity in a shape you can see.
# Works the same way on CD-RW.
#
# ── WHAT THE ENGINE PRODUCES ─────────────────────────────────────────────────
#
# One canonical 44-byte-header PCM WAV (44.1 kHz, 16-bit, stereo, 1400 s)
# written in full to stdout or a file.  Burn it as an audio track:
#
#   mkdir out
#   python -m MEE.SGM.engrave pie > out/a.wav
#   drutil burn -noverify -nofs -audio -notest -noappendable -erase -eject out
#
# Patterns:
#   pitch  — 440 Hz sine, left == right.  Calibration / listening test.
#   bands  — 8 concentric rings alternating between two byte levels.
#   pie    — 4 angular slices, modelled on the spiral's real geometry
#            (radius grows by one track pitch per revolution).
#
# ── GUARANTEES ───────────────────────────────────────────────────────────────
#   - Output is deterministic: same pattern → same bytes, every run.
#   - Header is exactly 44 bytes; file is exactly 44 + 246,960,000 bytes.
#     Either check failing aborts the run before a single byte is written.
#
# ── Module layout ─────────────────────────────────────────────────────────────
#   SMM/constants.py        — format + geometry constants, Pattern enum
#   SGM/byte_encoder.py     — little-endian int16 / int32 emitters
#   SGM/wav_header.py       — 44-byte RIFF/WAVE header
#   SGM/pattern_builder.py  — pitch / bands / pie generators
#   SGM/engrave.py          — orchestrator + CLI
#   SVM/wav_inspect.py      — header parse, payload profile
#   SVM/disc_check.py       — verification CLI
#   SVM/validate.py         — self-validation suite
#
# Physics references:
#   - ECMA-130 (CD-ROM), ECMA-394 / ECMA-395 (CD-R / CD-RW)
#   - IEC 60908 (Red Book audio)
# =============================================================================

__version__ = "0.1.0"
