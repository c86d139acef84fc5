"""Downloader for the CITO central exam documents (VWO)."""

__version__ = "0.1.0"
