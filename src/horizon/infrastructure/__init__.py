"""Infrastructure: settings, logging, feed adapters and dependency wiring."""
