"""
BusinessHub - Business Directory Backend.

REST API for a business directory: listings, categories, cities, reviews,
leads, ownership claims, featured listings and a CMS back-office.
"""

__version__ = "1.0.0"
