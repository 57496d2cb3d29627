"""
Root Route

Returns the fixed greeting payload.
"""

from api.models.responses import HelloResponse


async def hello() -> HelloResponse:
    """
    Root endpoint.
    
    Consults nothing from the request and always answers 200.
    """
    return HelloResponse()
