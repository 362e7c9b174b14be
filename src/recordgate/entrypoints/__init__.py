"""Entry points (command-line interface) for recordgate."""
