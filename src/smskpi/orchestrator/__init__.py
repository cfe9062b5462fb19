"""Orchestration module."""
from .processor import KpiProcessor, ProcessingResult

__all__ = ["KpiProcessor", "ProcessingResult"]
