"""commgate command line interface."""
