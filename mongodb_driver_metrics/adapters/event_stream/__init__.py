"""Driver event stream adapters."""

from mongodb_driver_metrics.adapters.event_stream.fake import FakeEventStream
from mongodb_driver_metrics.adapters.event_stream.pymongo_listeners import PymongoEventStream

__all__ = ["PymongoEventStream", "FakeEventStream"]
