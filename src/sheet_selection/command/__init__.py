"""AI command boundary: payload models, placement and transport."""
