"""Merge and info tools."""
