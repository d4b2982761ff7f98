"""Skillbridge: resume gap analysis against a target job role."""

__version__ = "0.1.0"
