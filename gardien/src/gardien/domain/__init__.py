"""Gardien domain layer."""
