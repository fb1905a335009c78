"""Adapters connecting structured loggers to concrete log destinations."""
