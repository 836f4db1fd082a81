"""
Generative fallback engine tests.

Field content from a real model is not deterministic, so these tests drive
the engine with scripted replies and assert on structure, coercion and the
re-prompt path only.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from travel_resolver.errors import SchemaValidationFailed
from travel_resolver.llm.fallback import GenerativeFallbackEngine, build_fallback_engine
from travel_resolver.resolvers.seat_map import SimulatedSeatOption
from travel_resolver.types import FlightSearchResult, FlightStatus, ReservationPriceQuote

from payloads import fake_llm, flight_status_payload, search_items, seat_items


def scripted_llm(*replies):
    llm = MagicMock()
    llm.ainvoke = AsyncMock(side_effect=[
        AIMessage(content=r if isinstance(r, str) else json.dumps(r)) for r in replies
    ])
    return llm


class TestObjectCardinality:
    async def test_returns_validated_model(self):
        engine = GenerativeFallbackEngine(fake_llm(flight_status_payload("BA123")))

        status = await engine.generate("Flight status for BA123", FlightStatus, "object")

        assert isinstance(status, FlightStatus)
        assert status.flight_number == "BA123"

    async def test_code_fences_are_tolerated(self):
        reply = "```json\n" + json.dumps({"totalPriceInUSD": 420.5}) + "\n```"
        engine = GenerativeFallbackEngine(fake_llm(reply))

        quote = await engine.generate("price", ReservationPriceQuote, "object")

        assert quote.total_price_in_usd == 420.5

    async def test_single_item_list_is_unwrapped(self):
        engine = GenerativeFallbackEngine(fake_llm([{"totalPriceInUSD": 99.0}]))

        quote = await engine.generate("price", ReservationPriceQuote, "object")

        assert quote.total_price_in_usd == 99.0

    async def test_prompt_carries_schema_and_query(self):
        llm = scripted_llm({"totalPriceInUSD": 10.0})
        engine = GenerativeFallbackEngine(llm)

        await engine.generate("Generate price for seat 12A on AA31", ReservationPriceQuote, "object")

        messages = llm.ainvoke.call_args.args[0]
        assert isinstance(messages[0], SystemMessage)
        assert "totalPriceInUSD" in messages[0].content
        assert "single JSON object" in messages[0].content
        assert isinstance(messages[1], HumanMessage)
        assert "seat 12A on AA31" in messages[1].content


class TestArrayCardinality:
    async def test_returns_list_of_models(self):
        engine = GenerativeFallbackEngine(fake_llm(search_items(3)))

        flights = await engine.generate("search", FlightSearchResult, "array", max_items=4)

        assert len(flights) == 3
        assert all(isinstance(f, FlightSearchResult) for f in flights)

    async def test_over_long_arrays_are_capped(self):
        engine = GenerativeFallbackEngine(fake_llm(search_items(7)))

        flights = await engine.generate("search", FlightSearchResult, "array", max_items=4)

        assert [f.id for f in flights] == ["BA100", "BA101", "BA102", "BA103"]

    async def test_wrapped_array_is_unwrapped(self):
        engine = GenerativeFallbackEngine(fake_llm({"flights": search_items(2)}))

        flights = await engine.generate("search", FlightSearchResult, "array", max_items=4)

        assert len(flights) == 2

    async def test_exact_count_prompt_and_enforcement(self):
        llm = scripted_llm(seat_items(30))
        engine = GenerativeFallbackEngine(llm)

        seats = await engine.generate("seats", SimulatedSeatOption, "array", min_items=30, max_items=30)

        assert len(seats) == 30
        assert "exactly 30 items" in llm.ainvoke.call_args.args[0][0].content

    async def test_value_constraints_are_enforced(self):
        engine = GenerativeFallbackEngine(fake_llm(seat_items(30, price=150.0)), max_attempts=1)

        with pytest.raises(SchemaValidationFailed) as exc:
            await engine.generate("seats", SimulatedSeatOption, "array", min_items=30, max_items=30)

        assert exc.value.schema_name == "SimulatedSeatOption"

    async def test_duplicate_items_are_rejected(self):
        duplicates = [{"seatNumber": "1A", "priceInUSD": 10.0, "isAvailable": True}] * 30
        llm = scripted_llm(duplicates, seat_items(30))
        engine = GenerativeFallbackEngine(llm, max_attempts=2)

        seats = await engine.generate("seats", SimulatedSeatOption, "array",
                                      min_items=30, max_items=30, unique_by="seat_number")

        assert len({s.seat_number for s in seats}) == 30
        assert "No two items may share the same seatNumber" in llm.ainvoke.call_args_list[0].args[0][0].content
        assert "duplicate seatNumber" in llm.ainvoke.call_args_list[1].args[0][-1].content

    async def test_unknown_cardinality(self):
        engine = GenerativeFallbackEngine(fake_llm("{}"))

        with pytest.raises(ValueError):
            await engine.generate("x", FlightStatus, "many")


class TestSchemaEnforcement:
    async def test_invalid_reply_is_sent_back_with_errors(self):
        broken = flight_status_payload()
        del broken["arrival"]
        llm = scripted_llm(broken, flight_status_payload())
        engine = GenerativeFallbackEngine(llm, max_attempts=2)

        status = await engine.generate("status", FlightStatus, "object")

        assert isinstance(status, FlightStatus)
        assert llm.ainvoke.await_count == 2
        second = llm.ainvoke.call_args_list[1].args[0]
        assert isinstance(second[-2], AIMessage)
        assert isinstance(second[-1], HumanMessage)
        assert "arrival" in second[-1].content

    async def test_non_json_reply_counts_as_invalid(self):
        llm = scripted_llm("Sorry, I cannot help with that.", {"totalPriceInUSD": 12.0})
        engine = GenerativeFallbackEngine(llm, max_attempts=2)

        quote = await engine.generate("price", ReservationPriceQuote, "object")

        assert quote.total_price_in_usd == 12.0

    async def test_gives_up_after_max_attempts(self):
        llm = scripted_llm("nope", "still nope", "never")
        engine = GenerativeFallbackEngine(llm, max_attempts=2)

        with pytest.raises(SchemaValidationFailed):
            await engine.generate("price", ReservationPriceQuote, "object")

        assert llm.ainvoke.await_count == 2

    async def test_infinite_number_is_rejected_not_raised(self):
        reply = json.dumps(flight_status_payload()).replace('"totalDistanceInMiles": 3451', '"totalDistanceInMiles": 1e400')
        llm = scripted_llm(reply, reply)
        engine = GenerativeFallbackEngine(llm, max_attempts=2)

        with pytest.raises(SchemaValidationFailed) as exc:
            await engine.generate("status", FlightStatus, "object")

        assert exc.value.schema_name == "FlightStatus"
        assert llm.ainvoke.await_count == 2

    async def test_too_few_items_fails(self):
        engine = GenerativeFallbackEngine(fake_llm(seat_items(12)), max_attempts=1)

        with pytest.raises(SchemaValidationFailed):
            await engine.generate("seats", SimulatedSeatOption, "array", min_items=30, max_items=30)

    async def test_backend_errors_propagate_unchanged(self):
        llm = MagicMock()
        llm.ainvoke = AsyncMock(side_effect=ConnectionError("model backend down"))
        engine = GenerativeFallbackEngine(llm)

        with pytest.raises(ConnectionError):
            await engine.generate("price", ReservationPriceQuote, "object")


def test_build_from_settings(unconfigured_settings):
    settings = unconfigured_settings.model_copy(update={"FALLBACK_MAX_ATTEMPTS": 3, "TZ": "Europe/London"})

    engine = build_fallback_engine(settings, llm=fake_llm("{}"))

    assert engine.max_attempts == 3
    assert engine.tz == "Europe/London"
