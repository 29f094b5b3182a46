"""Pydantic schemas for expenses and settlements."""
