# prompt_pipeline/orchestrator/logging.py
"""Structured logging for the pipeline orchestrator."""

import json
import logging
from datetime import datetime, timezone


class PipelineLogger:
    """Structured JSON logger for pipeline events."""

    def __init__(self, name: str = "prompt_pipeline.orchestrator.events"):
        self.logger = logging.getLogger(name)

    def _log(self, level: int, event: str, **kwargs):
        """Log a structured event."""
        data = {
            "event": event,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **kwargs
        }
        self.logger.log(level, json.dumps(data))

    def generation_started(self, request_id: str, tool_id: str, stage: str):
        self._log(
            logging.INFO,
            "generation_started",
            request_id=request_id,
            tool_id=tool_id,
            stage=stage
        )

    def state_transition(self, request_id: str, from_state: str, to_state: str):
        """Log a state transition."""
        self._log(
            logging.DEBUG,
            "state_transition",
            request_id=request_id,
            from_state=from_state,
            to_state=to_state
        )

    def retrieval_degraded(self, request_id: str, collection: str, reason: str):
        self._log(
            logging.WARNING,
            "retrieval_degraded",
            request_id=request_id,
            collection=collection,
            reason=reason
        )

    def enhancement_fallback(self, request_id: str, provider: str, reason: str):
        self._log(
            logging.WARNING,
            "enhancement_fallback",
            request_id=request_id,
            provider=provider,
            reason=reason
        )

    def generation_complete(self, request_id: str, duration_seconds: float, confidence: float, degraded: bool):
        """Log generation completion."""
        self._log(
            logging.INFO,
            "generation_complete",
            request_id=request_id,
            duration_seconds=round(duration_seconds, 3),
            confidence=confidence,
            degraded=degraded
        )

    def error(self, request_id: str, error_type: str, message: str):
        """Log an error."""
        self._log(
            logging.ERROR,
            "error",
            request_id=request_id,
            error_type=error_type,
            message=message
        )
