"""Grid coordinate primitives, A1 labels and validation."""
