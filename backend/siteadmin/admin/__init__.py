"""Admin UI support endpoints: credentials file passthrough and ping."""
