from fastapi import APIRouter, Request

from .health import get_health

router = APIRouter()


@router.get('/health')
async def api_health(request: Request):
    return get_health(getattr(request.app.state, 'endpoint_paths', []))
