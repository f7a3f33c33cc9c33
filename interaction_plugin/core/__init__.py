"""Core runtime: configuration, logging, status service clients and plugins."""
