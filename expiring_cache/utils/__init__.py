"""Shared helpers for the expiring cache package."""
