import httpx
import time
from typing import Dict, Any, Optional

from travel_resolver.obs.logger import log_event


class AmadeusClient:
    """Thin async wrapper over the Amadeus Self-Service REST endpoints.

    Returns decoded JSON and lets httpx errors propagate; classifying them is
    the adapter's job. One attempt per call, no retries.
    """

    def __init__(self, client_id: str, client_secret: str, base_url: str,
                 timeout_seconds: float = 12.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.client_id = client_id
        self.client_secret = client_secret
        self.base_url = base_url.rstrip("/")
        self._token: Optional[str] = None
        self._exp = 0.0
        # Persistent HTTP client with HTTP/2 and sensible timeouts
        self._http = httpx.AsyncClient(
            http2=True,
            timeout=httpx.Timeout(connect=3.0, read=timeout_seconds,
                                  write=timeout_seconds, pool=timeout_seconds),
            transport=transport,
        )

    async def _get_token(self) -> str:
        # a stale read here only costs one extra token request
        if self._token and time.time() < self._exp - 60:
            return self._token
        data = {
            "grant_type": "client_credentials",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
        }
        r = await self._http.post(
            f"{self.base_url}/v1/security/oauth2/token",
            data=data,
            headers={"Accept": "application/json"},
        )
        r.raise_for_status()
        j = r.json()
        self._token = j["access_token"]
        self._exp = time.time() + j.get("expires_in", 1799)
        return self._token

    async def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        token = await self._get_token()
        url = f"{self.base_url}{path}"
        started = time.monotonic()
        r = await self._http.get(
            url,
            params=params,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
        )
        log_event(
            "amadeus_response",
            path=path,
            status=r.status_code,
            ms=round((time.monotonic() - started) * 1000.0, 2),
        )
        r.raise_for_status()
        return r.json()

    async def get_flight_schedule(self, carrier_code: str, flight_number: str,
                                  date: str) -> Dict[str, Any]:
        return await self._get("/v2/schedule/flights", {
            "carrierCode": carrier_code,
            "flightNumber": flight_number,
            "scheduledDepartureDate": date,
        })

    async def search_flight_offers(self, origin: str, destination: str,
                                   departure_date: str, adults: int = 1,
                                   max_results: int = 4) -> Dict[str, Any]:
        return await self._get("/v2/shopping/flight-offers", {
            "originLocationCode": origin,
            "destinationLocationCode": destination,
            "departureDate": departure_date,
            "adults": max(1, int(adults)),
            "max": max_results,
            "currencyCode": "USD",
        })

    async def get_seatmaps(self, flight_order_id: str) -> Dict[str, Any]:
        return await self._get("/v1/shopping/seatmaps", {"flight-orderId": flight_order_id})

    async def aclose(self) -> None:
        await self._http.aclose()
