"""Concrete pipeline steps."""
