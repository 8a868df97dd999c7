"""Frequency conversion services."""
