"""
Configuration loading and validation for codec settings.

Provides a strongly typed settings object (separator, encoding) loaded from
environment variables with upfront validation.
"""
