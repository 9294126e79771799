"""Reusable pytest fixtures for bindkit tests."""
