"""
Test helpers.

- sign_message: throwaway EVM keys and personal_sign signatures
"""
