"""InControl REST API clients."""
