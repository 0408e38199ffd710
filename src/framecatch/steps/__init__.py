"""Pipeline steps: frame extraction and frame diffing."""
