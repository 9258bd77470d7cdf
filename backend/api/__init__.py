"""
ROB portal API package.

Provides the FastAPI application for the artist/gallery portal core.
The application object lives in api.app (``uvicorn api.app:app``).
"""
