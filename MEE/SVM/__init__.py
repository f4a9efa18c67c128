# =============================================================================
# MEE/SVM/__init__.py — Signal Verification Module
# =============================================================================
#
# Everything needed to check a generated WAV before it goes anywhere near a
# blank disc.
#
# Sub-modules:
#   wav_inspect.py — header parse/compare, streamed payload profile
#   disc_check.py  — pre-burn verification CLI (PASS / FAIL verdict)
#   validate.py    — self-validation suite for the SMM/SGM stack
# =============================================================================
