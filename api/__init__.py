"""
Hello JSON API (FastAPI)

- GET / - Fixed greeting payload
- Anything else - 404 "Not Found: <METHOD>:<PATH>"

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
