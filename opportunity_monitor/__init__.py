"""Listing monitor that detects new grants, tenders and job postings."""

__version__ = "0.1.0"
