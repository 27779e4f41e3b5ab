import logging

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from errors import StatsError
from models import MAX_CUSTOMER_ID, MAX_TIMESTAMP, MIN_TIMESTAMP, ActivityEvent, DayStatisticsOut
from repo_counters import CounterRepo
from repo_eligibility import EligibilityRepo
from service_ingest import IngestService
from service_stats import StatsService
from settings import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Hourly Stats Backend")

# Repos + services are built once; routes receive them through Depends so
# tests can swap them with app.dependency_overrides.
counter_repo = CounterRepo()
ingest_svc = IngestService(EligibilityRepo(), counter_repo)
stats_svc = StatsService(counter_repo)


def get_ingest_service() -> IngestService:
    return ingest_svc


def get_stats_service() -> StatsService:
    return stats_svc


@app.exception_handler(RequestValidationError)
async def bad_request(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": "malformed request"})


@app.get("/health")
def health(svc: StatsService = Depends(get_stats_service)):
    try:
        svc.health_check()
        return {"ok": True}
    except StatsError as e:
        raise HTTPException(status_code=500, detail=f"DB health check failed: {e}")


@app.post("/customer/stats")
def customer_stats(
    event: ActivityEvent,
    user_agent: str | None = Header(None),
    svc: IngestService = Depends(get_ingest_service),
):
    event = event.model_copy(update={"user_agent": user_agent or ""})
    result = svc.ingest(event)
    if result.error is not None:
        raise HTTPException(status_code=500, detail="internal error")
    if not result.outcome.accepted:
        raise HTTPException(status_code=result.outcome.status_hint, detail=result.outcome.reason)
    return {"status": "ok"}


@app.get("/customer/stats/{customer_id}/day/{day}", response_model=DayStatisticsOut)
def day_stats(customer_id: str, day: str, svc: StatsService = Depends(get_stats_service)):
    try:
        cid, day_ts = int(customer_id), int(day)
    except ValueError:
        raise HTTPException(status_code=400, detail="customer id and day must be integers")
    if not 0 < cid <= MAX_CUSTOMER_ID or not MIN_TIMESTAMP <= day_ts <= MAX_TIMESTAMP:
        raise HTTPException(status_code=400, detail="customer id or day out of range")

    try:
        summary = svc.get_day_statistics(cid, day_ts)
    except StatsError as e:
        logger.error("day statistics failed for customer %s: %s", cid, e)
        raise HTTPException(status_code=500, detail="Day statistics failed")
    return DayStatisticsOut.from_summary(summary)
