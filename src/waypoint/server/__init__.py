"""Server layer — dispatch, response shaping and ASGI emission."""
