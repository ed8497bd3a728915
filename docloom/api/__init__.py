"""
REST API module for docloom.

Provides FastAPI endpoints for:
- UML class diagram generation (PlantUML source or rendered image)
- Javadoc generation
"""
