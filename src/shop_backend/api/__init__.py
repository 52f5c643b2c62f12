"""
HTTP surface.

Components:
- app.py: FastAPI application factory (health endpoint)
- models.py: pydantic response models
- server.py: uvicorn server running in a background thread
"""
