"""
Package: delivery
Description: Multicast delivery to the messaging gateway.

Provides request validation, the HTTP transport, backoff between
rounds and result reconciliation for partial-failure retries.
"""
