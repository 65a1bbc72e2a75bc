"""Candidate-job matching and recommendation engine for the learning portal."""

__version__ = "0.3.0"
