"""Selection-to-range transforms."""
