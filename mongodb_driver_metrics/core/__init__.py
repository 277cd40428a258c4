"""Event-to-metric mapping engine for the MongoDB driver exporter."""
