"""
Portfolio CMS - REST backend for a personal portfolio
"""

__version__ = "1.0.0"
