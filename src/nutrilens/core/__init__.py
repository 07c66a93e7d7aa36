"""Core configuration and logging for NutriLens."""
