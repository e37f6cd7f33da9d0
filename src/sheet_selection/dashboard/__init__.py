"""Session state for the editor UI."""
