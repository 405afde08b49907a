"""
TaxWise Backend Application.

A FastAPI service that merges uploaded tax documents into a single PDF and
asks an AI model (OpenAI) to compare the old and new Indian income tax regimes.
"""

__version__ = "1.0.0"
