"""Control layer: trackers, sample sources and the controller."""
