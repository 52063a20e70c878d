"""Graph workflows."""
