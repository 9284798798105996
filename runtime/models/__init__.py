"""
Pydantic / datamodels used by the logger runtime.

Split into:
- log_models: ResourceKey + the LogQuery variants resolved by GET /logs
- api_models: HTTP request/response schemas
"""
