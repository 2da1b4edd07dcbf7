"""Textual user interface for the email assistant."""
