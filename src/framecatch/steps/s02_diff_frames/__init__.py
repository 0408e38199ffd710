"""Step 02: Frame diffing."""
