"""Planning domain: work items, workers, calendar arithmetic and the engine services."""
