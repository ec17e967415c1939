"""Single-device pitch-by-pitch scorekeeping."""
