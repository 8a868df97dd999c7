"""Command line interface for SeaTuner."""
