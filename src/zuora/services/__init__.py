"""Service layer: session lifecycle, the gateway, associations, persistence.

Services may import from domain, wire, infrastructure, and objects.
They must never import from commands or output.
"""
