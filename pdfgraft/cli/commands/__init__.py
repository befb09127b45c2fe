"""Click commands exposed by the pdfgraft CLI."""
