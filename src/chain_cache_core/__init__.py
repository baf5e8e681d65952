"""Core types, configuration and serialization for chain-cache."""
