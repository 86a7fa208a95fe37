"""Gardien application layer."""
