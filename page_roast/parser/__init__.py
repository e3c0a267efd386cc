"""HTML signal extraction."""
