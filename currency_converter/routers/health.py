from fastapi import APIRouter, Depends

from currency_converter.routers.deps import get_session
from currency_converter.services.session import ConverterSession

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(session: ConverterSession = Depends(get_session)):
    loaded = session.snapshot is not None
    return {
        "status": "ok" if loaded else "degraded",
        "rates_loaded": loaded,
        "history_size": len(session.history),
    }
