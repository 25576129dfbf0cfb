"""Core detection, mapping, and scoring pipeline."""
