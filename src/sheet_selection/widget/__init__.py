"""Grid handle interface, selection store and restore guard."""
