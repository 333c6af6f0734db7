"""Shared test fixtures: wire payload factories and a scriptable transport."""
