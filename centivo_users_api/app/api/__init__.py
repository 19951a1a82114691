"""
API package.

``router.py`` aggregates the domain routers defined in ``endpoints``.
"""
