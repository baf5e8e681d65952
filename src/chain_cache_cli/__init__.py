"""chain-cache command line interface."""
