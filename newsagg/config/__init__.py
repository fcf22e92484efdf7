"""Settings, logging and the news source table."""
