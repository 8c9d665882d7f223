"""Response helpers."""

from typing import Any, Dict, List

from fastapi import Response

from ..db import PageInfo

def paginated(response: Response, items: List[Any], page_info: PageInfo) -> Dict[str, Any]:
    """Build the list envelope and copy the pagination metadata into headers."""
    for name, value in page_info.headers().items():
        response.headers[name] = value
    return {
        "data": items,
        "pagination": page_info.to_dict(),
    }
