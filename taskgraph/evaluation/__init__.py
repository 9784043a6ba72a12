"""Synthetic data for demos and tests."""

from .generator import TaskGenerator

__all__ = ['TaskGenerator']
