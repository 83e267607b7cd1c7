"""graphshare command line interface."""
