"""Engine helpers and CLI utilities."""
