"""Pitch period detection."""
