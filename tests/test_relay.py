"""
tests/test_relay.py

Unit tests for PromptRelay.

Verifies:
✔ empty / whitespace-only text → InvalidInput, no upstream call
✔ missing or placeholder credential → ConfigurationError, no upstream call
✔ exactly one upstream call with the filled template
✔ model output returned unmodified
✔ upstream exceptions become failure responses
✔ relay() always returns exactly one of result / error
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from legal.errors import ConfigurationError, InvalidInputError, UpstreamError
from legal.relay import PromptRelay, RelayRequest, RelayResponse
from server.config import Settings


class TestGenerate:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", [None, "", " ", "\n\t  "])
    async def test_blank_text_rejected_without_call(self, settings, generator, text):
        relay = PromptRelay(settings, generator)
        with pytest.raises(InvalidInputError, match="Text is required"):
            await relay.generate("simplify", text)
        generator.generate_content.assert_not_called()

    @pytest.mark.asyncio
    async def test_placeholder_key_rejected_without_call(self, unconfigured_settings, generator):
        relay = PromptRelay(unconfigured_settings, generator)
        with pytest.raises(ConfigurationError):
            await relay.generate("simplify", "Some text")
        generator.generate_content.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_key_rejected_without_call(self, generator):
        relay = PromptRelay(Settings(gemini_api_key=""), generator)
        with pytest.raises(ConfigurationError):
            await relay.generate("summary", "Some text")
        generator.generate_content.assert_not_called()

    @pytest.mark.asyncio
    async def test_single_call_with_template(self, settings, generator):
        relay = PromptRelay(settings, generator)
        await relay.generate("simplify", "Tenant shall pay rent monthly.")

        generator.generate_content.assert_awaited_once()
        prompt = generator.generate_content.await_args.args[0]
        assert "simplify" in prompt
        assert "Tenant shall pay rent monthly." in prompt

    @pytest.mark.asyncio
    async def test_unknown_task_sends_raw_text(self, settings, generator):
        relay = PromptRelay(settings, generator)
        await relay.generate("translate", "Raw prompt here")
        generator.generate_content.assert_awaited_once_with("Raw prompt here")

    @pytest.mark.asyncio
    async def test_output_passed_through_unmodified(self, settings):
        raw = "  **Bold** answer\n\n- with bullets  \n"
        stub = AsyncMock()
        stub.generate_content.return_value = raw
        relay = PromptRelay(settings, stub)
        assert await relay.generate("keypoints", "text") == raw

    @pytest.mark.asyncio
    async def test_generic_exception_wrapped(self, settings):
        stub = AsyncMock()
        stub.generate_content.side_effect = RuntimeError("connection reset")
        relay = PromptRelay(settings, stub)
        with pytest.raises(UpstreamError, match="connection reset") as info:
            await relay.generate("summary", "text")
        assert isinstance(info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_upstream_error_propagates_as_is(self, settings):
        stub = AsyncMock()
        stub.generate_content.side_effect = UpstreamError("Gemini API error (HTTP 503)")
        relay = PromptRelay(settings, stub)
        with pytest.raises(UpstreamError, match="HTTP 503"):
            await relay.generate("summary", "text")


class TestRelay:

    @pytest.mark.asyncio
    async def test_simplify_scenario(self, settings, generator):
        relay = PromptRelay(settings, generator)
        response = await relay.relay(
            RelayRequest(task_type="simplify", text="Tenant shall pay rent monthly.")
        )
        assert response == RelayResponse(success=True, result="Pay rent every month.")
        assert response.error is None

    @pytest.mark.asyncio
    async def test_empty_request(self, settings, generator):
        relay = PromptRelay(settings, generator)
        response = await relay.relay(RelayRequest(task_type="", text=""))

        assert response.success is False
        assert response.error == "Text is required"
        assert response.result is None
        assert response.status_code == 400
        generator.generate_content.assert_not_called()

    @pytest.mark.asyncio
    async def test_upstream_failure(self, settings):
        stub = AsyncMock()
        stub.generate_content.side_effect = ValueError("quota exceeded")
        relay = PromptRelay(settings, stub)
        response = await relay.relay(RelayRequest(task_type="chat", text="Question?"))

        assert response.success is False
        assert response.error == "quota exceeded"
        assert response.result is None
        assert response.status_code == 500

    @pytest.mark.asyncio
    async def test_configuration_failure(self, unconfigured_settings, generator):
        relay = PromptRelay(unconfigured_settings, generator)
        response = await relay.relay(RelayRequest(task_type="chat", text="Question?"))

        assert response.success is False
        assert "GEMINI_API_KEY" in response.error
        assert response.status_code == 500

    @pytest.mark.asyncio
    async def test_failure_does_not_affect_next_request(self, settings):
        stub = AsyncMock()
        stub.generate_content.side_effect = [RuntimeError("boom"), "second answer"]
        relay = PromptRelay(settings, stub)

        first = await relay.relay(RelayRequest(task_type="summary", text="a"))
        second = await relay.relay(RelayRequest(task_type="summary", text="b"))

        assert first.success is False
        assert second == RelayResponse(success=True, result="second answer")

    @pytest.mark.asyncio
    async def test_concurrent_calls_are_independent(self, settings):
        async def echo(prompt):
            await asyncio.sleep(0)
            return prompt[-1]

        stub = AsyncMock()
        stub.generate_content.side_effect = echo
        relay = PromptRelay(settings, stub)

        responses = await asyncio.gather(
            *(relay.relay(RelayRequest(task_type=None, text=str(i))) for i in range(5))
        )
        assert [r.result for r in responses] == ["0", "1", "2", "3", "4"]
