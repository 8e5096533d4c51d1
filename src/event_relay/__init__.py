"""
Event Relay - minimal pub/sub relay service

Accepts events over HTTP and fans them out to every connected client
through a Server-Sent Events (SSE) stream backed by a single in-memory
broadcast topic.
"""

__version__ = "0.1.0"
