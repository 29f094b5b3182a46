"""Core configuration and helpers."""
