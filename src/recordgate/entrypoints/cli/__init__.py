"""recordgate command-line interface."""
