"""Domain services for the shared playlist."""
