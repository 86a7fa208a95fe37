"""
Gardien - Wallet Ownership Verification Service

Binds chat-platform identities to blockchain wallets through
signed, single-use challenges.
"""

__version__ = "0.1.0"
