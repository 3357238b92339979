"""
posts-pipeline: load forum posts from an XML export into a document store
and render PDF reports from it.
"""

__version__ = "0.1.0"
