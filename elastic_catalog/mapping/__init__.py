"""Field mapping flattening and type inference."""
