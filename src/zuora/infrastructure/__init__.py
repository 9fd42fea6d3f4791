"""Infrastructure layer: the HTTP transport and the service contract."""
