"""modelgate HTTP API — routes, schemas, and middleware."""
