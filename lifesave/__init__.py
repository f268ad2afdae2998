"""
LifeSave health assistant service.

Keyword-matching symptom checker and chat assistant backed by a small
in-memory health dataset.
"""

__version__ = "1.0.0"
