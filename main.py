from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

from travel_resolver import __version__
from travel_resolver.config import settings
from travel_resolver.errors import APIError, SchemaValidationFailed, UpstreamGenerationError, error_content
from travel_resolver.obs.logger import log_event
from travel_resolver.obs.metrics import get_metrics_snapshot
from travel_resolver.obs.middleware import ObservabilityMiddleware
from travel_resolver.service import TravelDataService, create_travel_data_service
from travel_resolver.tools import FlightSearchArgs, FlightStatusArgs, ReservationPriceArgs, SeatSelectionArgs

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    print("[INFO] Starting travel data resolver")
    app.state.service = create_travel_data_service(settings)
    if app.state.service.provider.configured:
        print(f"[INFO] Amadeus provider enabled ({settings.AMADEUS_ENV})")
    else:
        print("[INFO] Amadeus credentials not set, answering from the generative fallback only")

    yield

    print("[INFO] Shutting down travel data resolver")
    await app.state.service.aclose()


app = FastAPI(
    title="Travel Data Resolver",
    version=__version__,
    lifespan=lifespan,
)
app.add_middleware(ObservabilityMiddleware)


def get_service(request: Request) -> TravelDataService:
    return request.app.state.service


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    return JSONResponse(status_code=exc.status_code, content=error_content(exc.code, exc.detail, exc.details))


@app.exception_handler(SchemaValidationFailed)
async def schema_failure_handler(request: Request, exc: SchemaValidationFailed):
    log_event("fallback_failed", level="ERROR", schema=exc.schema_name, error=exc.detail[:500])
    err = UpstreamGenerationError(
        "Could not produce travel data for this request",
        details={"schema": exc.schema_name},
    )
    return await api_error_handler(request, err)


@app.get("/")
async def root():
    return {
        "service": "Travel Data Resolver",
        "version": __version__,
        "status": "running",
        "queries": ["flight_status", "flight_search", "seat_map", "reservation_price"],
    }


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "travel-data-resolver"}


@app.get("/metrics")
async def metrics():
    return get_metrics_snapshot()


@app.post("/flights/status")
async def flight_status(body: FlightStatusArgs, service: TravelDataService = Depends(get_service)):
    status = await service.flight_status(body.flight_number, body.date)
    return status.to_payload()


@app.post("/flights/search")
async def flight_search(body: FlightSearchArgs, service: TravelDataService = Depends(get_service)):
    flights = await service.flight_search(body.origin, body.destination, body.departure_date)
    return {"flights": [f.to_payload() for f in flights]}


@app.post("/flights/seats")
async def seat_map(body: SeatSelectionArgs, service: TravelDataService = Depends(get_service)):
    seats = await service.seat_map(body.flight_number)
    return {"seats": [s.to_payload() for s in seats]}


@app.post("/reservations/price")
async def reservation_price(body: ReservationPriceArgs, service: TravelDataService = Depends(get_service)):
    quote = await service.price(body.reservation)
    return quote.to_payload()
