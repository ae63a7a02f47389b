"""
Public Pydantic schemas used by FastAPI routes and tests.

Request schemas carry the field-level validation rules; response schemas
describe the success envelopes and the error envelope.
"""

from .common import ApiResponse, ErrorResponse, ListResponse, MessageResponse  # noqa: F401
