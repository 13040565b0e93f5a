"""
Common Pydantic schemas
"""

from pydantic import BaseModel

class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint"""
    error: str

class StatusResponse(BaseModel):
    """Health check response"""
    status: str
