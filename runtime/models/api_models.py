"""
HTTP request/response models for the logger API.

/log and /clear read their bodies as free-form JSON objects (records are not
schema-checked), so only the responses are modelled here.
"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "running"
    logDirectory: str
    timestamp: str


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
