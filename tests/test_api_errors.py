import logging

from app.api.errors import error_response, lookup
from app.domain.errors import (
    CartNotFound,
    CommitFailed,
    GatewayDecline,
    GatewayUnavailable,
    TransactionNotFound,
    ValidationError,
)


class TestErrorTable:
    def test_subclasses_inherit_their_kind(self):
        assert lookup(CartNotFound()) == (404, logging.WARNING)
        assert lookup(TransactionNotFound()) == (404, logging.WARNING)

    def test_commit_failure_never_looks_like_a_bad_request(self):
        assert lookup(CommitFailed())[0] == 500
        assert lookup(CommitFailed())[1] == logging.CRITICAL
        assert lookup(CommitFailed()) != lookup(ValidationError())

    def test_decline_and_unavailable(self):
        assert lookup(GatewayDecline())[0] == 400
        assert lookup(GatewayUnavailable())[0] == 500


class TestErrorResponse:
    def test_flags_are_added_to_body(self):
        response = error_response(ValidationError(), success=False)
        assert response.status_code == 400
        assert response.body == b'{"success":false,"error":"Missing required fields"}'

    def test_decline_uses_message_key(self):
        response = error_response(GatewayDecline("Do Not Honor"), success=False)
        assert response.body == b'{"success":false,"message":"Do Not Honor"}'

    def test_commit_failure_carries_transaction_id(self):
        response = error_response(CommitFailed(transaction_id="TX1"))
        assert response.status_code == 500
        assert b'"transactionId":"TX1"' in response.body
