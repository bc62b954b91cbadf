"""Testes de correlation_id e métricas via log."""

from __future__ import annotations

import logging

import pytest

from app.observability import (
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    record_refresh_outcome,
    reset_correlation_id,
    set_correlation_id,
)


class TestCorrelation:
    def test_default_is_empty(self) -> None:
        assert get_correlation_id() == ""

    def test_set_and_reset(self) -> None:
        token = set_correlation_id("abc")
        assert get_correlation_id() == "abc"
        reset_correlation_id(token)
        assert get_correlation_id() == ""

    def test_generate_with_prefix(self) -> None:
        value = generate_correlation_id("refresh")
        assert value.startswith("refresh-")
        assert len(value) == len("refresh-") + 32

    def test_scope_creates_and_restores(self) -> None:
        with correlation_scope("login") as correlation_id:
            assert correlation_id.startswith("login-")
            assert get_correlation_id() == correlation_id
        assert get_correlation_id() == ""

    def test_nested_scope_reuses_outer_id(self) -> None:
        with correlation_scope("logout") as outer:
            with correlation_scope("validate") as inner:
                assert inner == outer


class TestMetrics:
    def test_refresh_outcome_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="app.observability.metrics"):
            record_refresh_outcome("failed", failure_count=2)
        record = caplog.records[-1]
        assert record.getMessage() == "metric_token_refresh"
        assert record.outcome == "failed"
        assert record.failure_count == 2
