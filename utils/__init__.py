"""Shared helpers for petprint."""
