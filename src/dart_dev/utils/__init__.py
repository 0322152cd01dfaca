"""Utility helpers for dart_dev."""
