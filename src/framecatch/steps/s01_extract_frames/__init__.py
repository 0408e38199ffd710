"""Step 01: Video to Frames."""
