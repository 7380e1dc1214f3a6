"""Realtime chat and notification backend for the internship portal."""
