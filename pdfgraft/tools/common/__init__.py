"""Shared plumbing for pdfgraft tools."""
