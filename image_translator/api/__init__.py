"""HTTP surface: page, JSON API and health check."""
