"""Telemetry, per-view render state, and the debounced redraw scheduler."""
