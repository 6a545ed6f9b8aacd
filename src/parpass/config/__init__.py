"""Configuration, logging and error reporting for the ParPass client."""
