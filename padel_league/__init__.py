"""Round-robin and Americano scheduling with standings and player analytics."""

__version__ = "0.1.0"
