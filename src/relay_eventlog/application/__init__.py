"""Application layer: ports and the event log service façade."""
