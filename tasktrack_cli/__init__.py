"""Command-line front end for tasktrack."""
