"""
Order Desk

Purchase order persistence, status transitions and monthly profit reporting.
"""

__version__ = "1.0.0"
