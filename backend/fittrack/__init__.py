"""FitTrack API backend."""
