"""FastAPI application and routes.

The app should be imported directly from app module to avoid
import-time side effects:

    from sql_quest.api.app import app
"""
