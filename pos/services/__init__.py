"""Service layer: pricing, the order workflow and structured logging."""
