"""
Tests for thought reframing with and without the remote model.

Run with: python -m pytest tests/test_reframing_service.py -v
"""

import asyncio
import random

import pytest

from fakes import RecordingHandler, chat_response, make_client, server_error_handler, timeout_handler


def _reframe(client, distortion_type="Catastrophizing", thought="Everything is ruined"):
    from reflect.services.reframing_service import ReframingService

    service = ReframingService(client=client, rng=random.Random(1))
    return asyncio.run(service.generate_reframed_thought(thought, distortion_type, "a hard week"))


class TestRemoteReframe:
    def test_uses_model_answer_without_quotes(self):
        handler = RecordingHandler(chat_response('  "Is it possible this is only one bad day?"  '))

        assert _reframe(make_client(handler)) == "Is it possible this is only one bad day?"

        _, body = handler.requests[0]
        assert body["temperature"] == 0.3
        assert body["max_tokens"] == 200
        assert body["messages"][0]["role"] == "system"
        assert 'ORIGINAL THOUGHT: "Everything is ruined"' in body["messages"][1]["content"]
        assert "DISTORTION TYPE: Catastrophizing" in body["messages"][1]["content"]

    @pytest.mark.parametrize("handler", [server_error_handler, timeout_handler, chat_response('""')])
    def test_failures_use_templates(self, handler):
        from reflect.services.reframing_service import REFRAME_TEMPLATES

        assert _reframe(make_client(handler)) in REFRAME_TEMPLATES["Catastrophizing"]


class TestTemplateReframe:
    def test_no_key_makes_no_call(self):
        from reflect.services.reframing_service import REFRAME_TEMPLATES

        handler = RecordingHandler(chat_response("unused"))
        reframed = _reframe(make_client(handler, api_key=""), "Mind Reading")

        assert reframed in REFRAME_TEMPLATES["Mind Reading"]
        assert handler.requests == []

    def test_type_lookup_is_case_insensitive(self, unconfigured_client):
        from reflect.services.reframing_service import REFRAME_TEMPLATES

        assert _reframe(unconfigured_client, "emotional reasoning") in REFRAME_TEMPLATES["Emotional Reasoning"]

    def test_unknown_type_uses_catastrophizing(self, unconfigured_client):
        from reflect.services.reframing_service import REFRAME_TEMPLATES

        assert _reframe(unconfigured_client, "Labeling") in REFRAME_TEMPLATES["Catastrophizing"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
