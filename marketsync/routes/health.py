from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])

@router.get("/health")
async def health_check():
    """Basic health check"""
    return {"status": "healthy", "service": "Shopify BackMarket Sync"}

@router.get("/health/scheduler")
async def scheduler_health(request: Request):
    """Scheduler state and the next run of each sync job"""
    scheduler = getattr(request.app.state, "scheduler", None)
    if scheduler is None:
        return {"status": "not_initialized", "jobs": []}
    return scheduler.status()
