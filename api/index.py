"""
Serverless entry point for the Service Desk API
"""
import os

# Set environment variables for serverless
os.environ.setdefault("ENVIRONMENT", "production")

from mangum import Mangum
from servicedesk.main import app

# Lambda handler for ASGI app (disable lifespan for serverless)
handler = Mangum(app, lifespan="off")
