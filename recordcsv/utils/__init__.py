"""
Generic utility functions shared across modules.

Includes error classes and text sanitization helpers.
"""
