"""
Evalyn client: upload videos for remote AI analysis and poll for the report.
"""

__version__ = "1.0.0"
