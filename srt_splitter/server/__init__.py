"""HTTP API for planning subtitle splits.

WHY: Host-editor bridges and automation tools (n8n, curl, a DAW plugin
talking over localhost) need to plan splits without shelling out to the
CLI.

HOW: app.py exposes a FastAPI application; models.py holds the pydantic
response schemas.
"""
