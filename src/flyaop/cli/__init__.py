"""flyaop command line interface."""
