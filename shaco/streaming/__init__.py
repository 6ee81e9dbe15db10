from shaco.streaming.event_stream import IngameEventStream, StreamState
