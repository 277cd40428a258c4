"""Adapters binding the core protocols to prometheus_client and PyMongo."""
