"""Planning value objects."""
