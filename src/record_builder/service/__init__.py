"""Demonstration services."""
