"""Planning entities."""
