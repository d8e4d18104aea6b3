"""Shared payload models and writers for the respond test suite."""
