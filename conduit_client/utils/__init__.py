"""Shared utilities for the Conduit client."""
