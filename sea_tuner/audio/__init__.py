"""Audio acquisition and decoding."""
