"""Kickstart -- interactive scaffolder for React + TypeScript front-ends."""

__version__ = "0.1.0"
