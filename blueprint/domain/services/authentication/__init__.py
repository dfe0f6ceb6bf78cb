"""Authentication gate service and its result types."""
