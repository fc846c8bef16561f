"""Pydantic request/response contracts of the HTTP API."""
