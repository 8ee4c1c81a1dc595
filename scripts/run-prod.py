"""
FastAPI Production Server

Run the customer support dispatcher API without reload.

Usage:
    python scripts/run-prod.py
"""

import sys
import os
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
os.chdir(project_root)

import uvicorn
from loguru import logger


def main():
    """Start the FastAPI production server"""
    logger.info("Customer Support Dispatcher - API Server (Production)")
    logger.info("Chat: POST http://localhost:8000/api/chat/messages")

    uvicorn.run(
        "support_dispatch.api.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=False,
        log_level="info",
        access_log=True,
    )


if __name__ == "__main__":
    main()
