"""filerenamer: AI-suggested filenames for batches of PDF files."""

__version__ = "0.1.0"
