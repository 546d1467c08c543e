"""Login, device registration and session caching."""
