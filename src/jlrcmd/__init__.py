"""Query and control Jaguar Land Rover vehicles via the InControl API."""

__version__ = "0.1.0"
