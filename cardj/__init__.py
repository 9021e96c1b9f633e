"""
CarDJ backend package.

A FastAPI service over a playlist/track catalog with a SQL store and an
in-memory fallback for when the database is unreachable.
"""
