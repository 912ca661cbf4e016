"""
LifeLog Server Entry Point

Run with: python main.py
Or with uvicorn: uvicorn app:app --reload
"""

import os

import uvicorn

if __name__ == "__main__":
    is_dev = os.getenv("ENVIRONMENT", "development") == "development"

    uvicorn.run(
        "app:app",
        host=os.getenv("LIFELOG_HOST", "127.0.0.1"),
        port=int(os.getenv("LIFELOG_PORT", "8000")),
        reload=is_dev,
        log_level="info",
    )
