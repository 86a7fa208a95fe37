"""
Message builder - canonical text a wallet signs to prove ownership.

Clients must sign these bytes verbatim, so any change to the layout
invalidates every outstanding challenge.
"""


class MessageBuilder:
    """Renders verification messages for a fixed service name."""

    FOOTER = "By signing this message, you confirm that you own this wallet."

    def __init__(self, service_name: str = "CDP Platform"):
        if not service_name:
            raise ValueError("Service name cannot be empty")
        self.service_name = service_name

    def render(self, wallet_address: str, nonce: str, timestamp_ms: int) -> str:
        """
        Render message text.

        Args:
            wallet_address: Wallet address as stored in the request
            nonce: Challenge nonce
            timestamp_ms: Issuance time in unix millis

        Returns:
            Message to sign
        """
        return "\n".join(
            [
                f"Verify wallet {wallet_address} for {self.service_name}",
                f"Nonce: {nonce}",
                f"Timestamp: {int(timestamp_ms)}",
                "",
                self.FOOTER,
            ]
        )
