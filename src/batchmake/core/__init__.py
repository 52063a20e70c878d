"""Configuration, logging, results and command execution."""
