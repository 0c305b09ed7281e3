"""
API module for HTTP interface.

This module contains the FastAPI application factory and route
definitions for the researcher search service.

Endpoints:
- Service descriptor and health checks
- Configuration check
- Researcher search
"""
