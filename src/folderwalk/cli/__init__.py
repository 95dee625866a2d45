"""Command-line front end for folderwalk."""
