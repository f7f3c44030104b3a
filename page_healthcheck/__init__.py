"""
page_healthcheck - One-shot HTTP content validator for a website.
"""

__version__ = "0.1.0"
