"""Interactive and one-shot command line interface."""
