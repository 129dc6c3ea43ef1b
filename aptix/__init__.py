"""
Aptix API root package.

This package contains all application source code organized by responsibility:
- api/       : FastAPI application, routes and HTTP handling
- core/      : Configuration, logging, errors and cross-cutting utilities
- services/  : Agent interaction pipeline and analytics recording
- llm/       : Completion provider clients and prompt templates
- database/  : Document store access (agent profiles, analytics)
- models/    : Pydantic models for request/response schemas
"""
__version__ = "1.2.4"
