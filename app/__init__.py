"""Blog API: CRUD for blog posts with a Redis cache-aside layer."""
