# =============================================================================
# SMM — Medium Constants Module
# Subfolder of MEE (Micro-Engraving Engine)
# =============================================================================
#
# constants.py — PCM format, WAV header layout, disc geometry, pattern levels
#                and the Pattern enumeration.  Imported by SGM and SVM; never
#                mutated at runtime.
# =============================================================================
