"""Application layer: ports, use cases, and the appender composite."""
