"""Configuration, logging, constants and errors."""
