"""Shared utilities for workfs."""
