"""Blueprint request gate.

Client-side validation and rate limiting applied to authentication requests
before they reach the identity backend.
"""
