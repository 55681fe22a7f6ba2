#!/usr/bin/env python3
"""
Script to run the API server.
"""
import uvicorn

from inventory_console.config import settings

if __name__ == "__main__":
    uvicorn.run("inventory_console.main:app", host="127.0.0.1", port=8000, reload=settings.debug)
