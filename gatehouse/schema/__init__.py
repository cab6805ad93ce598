"""Database schema for Gatehouse.

schema.sql in this package is the source of truth for the data model.
"""
