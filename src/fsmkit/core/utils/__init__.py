"""Shared helpers for fsmkit core modules."""
