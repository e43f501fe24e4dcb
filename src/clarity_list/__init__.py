"""Clarity List - a personal to-do list with model-assisted time estimates."""

__version__ = "0.1.0"
