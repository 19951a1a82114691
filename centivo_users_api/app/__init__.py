"""
FastAPI application for the Centivo users service.

``main.create_app`` assembles the application; ``server`` is the
process entry point that connects to MongoDB before serving HTTP.
"""
