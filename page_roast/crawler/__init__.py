"""Page retrieval for PageRoast."""
