"""
Tests for the audit log

Tests cover:
- Entries persisted with status, payloads and duration
- Secrets redacted before storage
- Storage failures swallowed so callers never fail on audit
"""

from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from channel_bridge.services.audit_service import AuditEntry, SqlAuditSink, sanitize_payload
from channel_bridge.utils.logging_config import clear_request_context, set_request_context


class TestSanitizePayload:

    def test_redacts_nested_secrets(self):
        payload = {
            "username": "hotel",
            "api_key": "abc",
            "guest": {"name": "Ada", "card_number": "4111"},
            "items": [{"Authorization": "Basic xyz", "id": 1}],
        }

        clean = sanitize_payload(payload)

        assert clean["username"] == "hotel"
        assert clean["api_key"] == "[REDACTED]"
        assert clean["guest"] == {"name": "Ada", "card_number": "[REDACTED]"}
        assert clean["items"] == [{"Authorization": "[REDACTED]", "id": 1}]
        assert payload["api_key"] == "abc"

    def test_none_passthrough(self):
        assert sanitize_payload(None) is None


class TestSqlAuditSink:

    def test_append_persists_entry(self, session_factory, log_repo):
        sink = SqlAuditSink(session_factory)
        set_request_context("req-42", "prop-1")
        try:
            sink.append(AuditEntry(
                system="channel",
                method="PUT",
                endpoint="/properties/ch-1/rooms/CH-R1/availability",
                success=True,
                status_code=200,
                request_payload=[{"date": "2024-01-01", "allotment": 3}],
                response_payload={"success": True, "token": "t"},
                duration_ms=12,
                property_id="prop-1",
            ))
        finally:
            clear_request_context()

        logs = log_repo.list_for_property("prop-1")
        assert len(logs) == 1
        log = logs[0]
        assert log.request_id == "req-42"
        assert log.success is True
        assert log.request_body == [{"date": "2024-01-01", "allotment": 3}]
        assert log.response_body == {"success": True, "token": "[REDACTED]"}
        assert log.duration_ms == 12

    def test_failure_entry_keeps_error(self, session_factory, log_repo):
        SqlAuditSink(session_factory).append(AuditEntry(
            system="pms", method="GET", endpoint="/properties/pms-1/rates",
            success=False, status_code=503, error="PMS unavailable", property_id="prop-1",
        ))

        assert log_repo.count(property_id="prop-1", success=False) == 1
        assert log_repo.list_for_property("prop-1")[0].error_message == "PMS unavailable"

    def test_storage_error_is_swallowed(self):
        session = MagicMock()
        session.__enter__.return_value = session
        session.__exit__.return_value = False
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("disk full"))
        sink = SqlAuditSink(lambda: session)

        sink.append(AuditEntry(system="pms", method="GET", endpoint="/x", success=True))

        session.commit.assert_called_once()
