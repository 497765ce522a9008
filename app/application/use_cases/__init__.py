"""Application use cases: orchestration beyond a single service call."""
