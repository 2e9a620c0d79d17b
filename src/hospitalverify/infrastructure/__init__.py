"""Infrastructure layer - HTTP, places search and geolocation."""
