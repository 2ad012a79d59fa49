"""Application layer: bootstrap, shared state and command dispatch."""
