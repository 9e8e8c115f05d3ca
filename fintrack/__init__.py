"""FinTrack: derived metrics and monthly snapshot history for a personal finance dashboard."""
