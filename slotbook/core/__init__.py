"""Core infrastructure: configuration, exceptions, logging and result types."""
