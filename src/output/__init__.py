"""NEMO output file naming."""
