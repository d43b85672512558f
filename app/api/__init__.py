"""HTTP API: versioned JSON endpoints and shared request dependencies."""
