"""
Runtime package for the NUI intercept logger server.

This package contains:
- API layer (FastAPI server + routes)
- Agents (ingest pipeline: sanitize, infer, append)
- Auth (shared-PIN cookie gate)
- Stores (append-only JSONL logs)
- Models (dataclasses and Pydantic schemas for keys, queries and responses)
"""
