"""Business logic services module."""
