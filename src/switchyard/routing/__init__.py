"""Routing: ordered route tables walked once per request.

Layers are registered during setup and tested in registration order;
mounts nest whole tables under a path prefix.
"""
