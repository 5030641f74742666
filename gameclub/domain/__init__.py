"""Domain entities and cache contracts."""
