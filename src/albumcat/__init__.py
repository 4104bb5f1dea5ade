"""Albumcat - photo album catalog with search and gallery views."""

__version__ = "0.1.0"
