"""Command line interface for pdfgraft."""
