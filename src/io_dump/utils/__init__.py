"""Shared utilities for io-dump."""
