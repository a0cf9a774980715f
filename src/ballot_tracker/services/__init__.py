"""Service layer composing the tracker search surfaces."""
