"""Configuration, errors, logging and the command-line entry point."""
