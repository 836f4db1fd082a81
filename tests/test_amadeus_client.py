import httpx
import pytest

from travel_resolver.amadeus.client import AmadeusClient

from payloads import amadeus_transport, offer, schedule_record

BASE = "https://test.api.amadeus.com"


def make_client(routes, seen):
    return AmadeusClient(
        client_id="client-id",
        client_secret="client-secret",
        base_url=BASE,
        transport=amadeus_transport(routes, seen),
    )


async def test_schedule_request_params_and_headers():
    seen = []
    client = make_client({"/v2/schedule/flights": {"data": [schedule_record()]}}, seen)

    body = await client.get_flight_schedule("BA", "123", "2024-06-01")
    await client.aclose()

    assert body["data"][0]["departure"]["iataCode"] == "LHR"
    token_req, call = seen
    assert token_req.url.path == "/v1/security/oauth2/token"
    assert b"grant_type=client_credentials" in token_req.content
    assert call.method == "GET"
    assert call.headers["Authorization"] == "Bearer TEST_TOKEN"
    assert call.url.params["carrierCode"] == "BA"
    assert call.url.params["flightNumber"] == "123"
    assert call.url.params["scheduledDepartureDate"] == "2024-06-01"


async def test_offer_search_params():
    seen = []
    client = make_client({"/v2/shopping/flight-offers": {"data": [offer()]}}, seen)

    await client.search_flight_offers("JFK", "LHR", "2024-06-01", max_results=4)
    await client.aclose()

    params = seen[-1].url.params
    assert params["originLocationCode"] == "JFK"
    assert params["destinationLocationCode"] == "LHR"
    assert params["departureDate"] == "2024-06-01"
    assert params["adults"] == "1"
    assert params["max"] == "4"
    assert params["currencyCode"] == "USD"


async def test_seatmap_keyed_by_flight_order():
    seen = []
    client = make_client({"/v1/shopping/seatmaps": {"data": []}}, seen)

    await client.get_seatmaps("eJzTd9f3NjIJdzUGAApA")
    await client.aclose()

    assert seen[-1].url.params["flight-orderId"] == "eJzTd9f3NjIJdzUGAApA"


async def test_token_is_reused_until_expiry():
    seen = []
    client = make_client({"/v2/schedule/flights": {"data": []}}, seen)

    await client.get_flight_schedule("BA", "123", "2024-06-01")
    await client.get_flight_schedule("BA", "124", "2024-06-01")
    await client.aclose()

    token_calls = [r for r in seen if r.url.path == "/v1/security/oauth2/token"]
    assert len(token_calls) == 1


async def test_http_errors_propagate_without_retry():
    seen = []
    client = make_client({"/v2/schedule/flights": (500, {"errors": []})}, seen)

    with pytest.raises(httpx.HTTPStatusError):
        await client.get_flight_schedule("BA", "123", "2024-06-01")
    await client.aclose()

    assert len([r for r in seen if r.url.path == "/v2/schedule/flights"]) == 1
