"""Pydantic request and response models for the kanban API."""
