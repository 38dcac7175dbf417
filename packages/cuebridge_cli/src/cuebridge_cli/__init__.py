"""cuebridge command-line interface."""
