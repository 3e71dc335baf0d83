"""
Snippetbox — View Schemas
==========================

What:  Read-only Pydantic models handed from the services to the templates
       and the JSON health endpoint.
Why:   Templates never touch ORM objects, so no lazy loads happen after the
       request session has closed.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class SnippetView(BaseModel):
    id: int = Field(description="Snippet identifier")
    title: str = Field(description="Snippet title")
    content: str = Field(description="Snippet body text")
    created: datetime = Field(description="When the snippet was created (UTC)")
    expires: datetime = Field(description="When the snippet stops being visible (UTC)")

    model_config = {"from_attributes": True}


class UserView(BaseModel):
    """Account details shown on /account/view. Never includes the password hash."""
    id: int
    name: str
    email: str
    created: datetime

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    """
    Health check response.

    Returned by GET /health for Docker health checks and load balancers.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
