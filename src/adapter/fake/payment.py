"""In-memory implementation of PaymentPort for testing."""

from port.payment import PaymentError


class FakePaymentAdapter:
    """Fake payment adapter that returns a preconfigured account ID."""

    def __init__(self, wallet_id: str | None = "acct_1", error: str | None = None):
        self.wallet_id = wallet_id
        self.error = error
        self.calls: list[str] = []

    async def connect(self, code: str) -> str | None:
        self.calls.append(code)
        if self.error:
            raise PaymentError(self.error)
        return self.wallet_id
