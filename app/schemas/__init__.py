"""
schemas/ — Pydantic models for form input, view-models and error bodies.
"""
