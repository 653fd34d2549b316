"""Tests for request validation and dispatch."""

import pytest

from bfhl_api.core.errors import ServiceUnavailableAppError, ValidationAppError
from bfhl_api.schemas.bfhl import (
    AIRequest,
    FibonacciRequest,
    HcfRequest,
    LcmRequest,
    PrimeRequest,
)
from bfhl_api.services.bfhl_service import (
    BfhlDispatcher,
    as_integer,
    decode_json_body,
    parse_bfhl_request,
)
from tests.fakes import FakeLLMClient


class TestDecodeJsonBody:
    def test_object(self) -> None:
        assert decode_json_body(b'{"hcf": [1]}') == {"hcf": [1]}

    def test_blank_body_is_empty_object(self) -> None:
        assert decode_json_body(b"") == {}
        assert decode_json_body(b"  \n") == {}

    @pytest.mark.parametrize("raw", [b"{", b"null", b"[]", b"3", b"\xff\xfe"])
    def test_rejects_non_objects(self, raw: bytes) -> None:
        with pytest.raises(ValidationAppError) as exc:
            decode_json_body(raw)
        assert exc.value.code == "invalid_json"
        assert exc.value.message == "Invalid JSON body"


class TestAsInteger:
    @pytest.mark.parametrize("value, expected", [(3, 3), (-4, -4), (5.0, 5), (0, 0)])
    def test_integers(self, value, expected) -> None:
        assert as_integer(value) == expected

    @pytest.mark.parametrize("value", [True, False, 2.5, "3", None, [1], float("inf")])
    def test_non_integers(self, value) -> None:
        assert as_integer(value) is None


class TestParseRequest:
    def test_variants(self) -> None:
        assert parse_bfhl_request({"fibonacci": 10}) == FibonacciRequest(n=10)
        assert parse_bfhl_request({"prime": [2, 4]}) == PrimeRequest(values=(2, 4))
        assert parse_bfhl_request({"hcf": [6, 9.0]}) == HcfRequest(values=(6, 9))
        assert parse_bfhl_request({"lcm": [3]}) == LcmRequest(values=(3,))
        assert parse_bfhl_request({"AI": "  Why?  "}) == AIRequest(question="Why?")

    def test_fibonacci_bounds(self) -> None:
        assert parse_bfhl_request({"fibonacci": 1}).n == 1
        assert parse_bfhl_request({"fibonacci": 1000}).n == 1000
        with pytest.raises(ValidationAppError):
            parse_bfhl_request({"fibonacci": -1})

    def test_two_keys(self) -> None:
        with pytest.raises(ValidationAppError) as exc:
            parse_bfhl_request({"prime": [2], "hcf": [4]})
        assert exc.value.message == "Request must contain exactly one top-level key"

    @pytest.mark.parametrize("key", ["prime", "hcf", "lcm"])
    def test_array_items_limited_to_safe_integers(self, key: str) -> None:
        edge = 2**53 - 1
        assert parse_bfhl_request({key: [edge, -edge]}).values == (edge, -edge)

        for out_of_range in (2**53, -(2**53), 2305843009213693951, 1e300):
            with pytest.raises(ValidationAppError) as exc:
                parse_bfhl_request({key: [3, out_of_range]})
            assert exc.value.code == "invalid_array_item"
            assert exc.value.message == f"{key} array must contain integers"

    def test_details_name_the_field(self) -> None:
        with pytest.raises(ValidationAppError) as exc:
            parse_bfhl_request({"hcf": []})
        assert exc.value.message == "hcf must be a non-empty array"
        assert exc.value.details == {"field": "hcf"}


class TestDispatcher:
    @pytest.mark.asyncio
    async def test_numeric_operations(self) -> None:
        dispatcher = BfhlDispatcher(llm_provider=FakeLLMClient)

        assert await dispatcher.execute(FibonacciRequest(n=5)) == [0, 1, 1, 2, 3]
        assert await dispatcher.execute(PrimeRequest(values=(2, 3, 4, 5, 1))) == [2, 3, 5]
        assert await dispatcher.execute(HcfRequest(values=(12, -18))) == 6
        assert await dispatcher.execute(LcmRequest(values=(0, 5))) == 0

    @pytest.mark.asyncio
    async def test_numeric_operations_never_touch_llm(self) -> None:
        def provider():
            raise AssertionError("LLM must not be resolved")

        dispatcher = BfhlDispatcher(llm_provider=provider)

        assert await dispatcher.execute(LcmRequest(values=(4, 6))) == 12

    @pytest.mark.asyncio
    async def test_ai_request_uses_provider(self) -> None:
        llm = FakeLLMClient(answer='{"data": "42"}')
        dispatcher = BfhlDispatcher(llm_provider=lambda: llm)

        assert await dispatcher.execute(AIRequest(question="Meaning of life?")) == "42"
        assert llm.prompts == ["Answer Question: Meaning of life?"]

    @pytest.mark.asyncio
    async def test_ai_request_without_client(self) -> None:
        def provider():
            raise ServiceUnavailableAppError(code="ai_not_configured", message="AI service not configured")

        dispatcher = BfhlDispatcher(llm_provider=provider)

        with pytest.raises(ServiceUnavailableAppError):
            await dispatcher.execute(AIRequest(question="Hello?"))

    @pytest.mark.asyncio
    async def test_lcm_result_too_large(self) -> None:
        dispatcher = BfhlDispatcher(llm_provider=FakeLLMClient)
        values = tuple(range(2**52, 2**52 + 40))

        with pytest.raises(ValidationAppError) as exc:
            await dispatcher.execute(LcmRequest(values=values))
        assert exc.value.code == "lcm_too_large"
        assert exc.value.message == "lcm result too large"
